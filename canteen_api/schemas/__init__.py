"""Request and response models (pydantic) for the canteen and menu routes."""
