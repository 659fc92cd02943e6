"""Run the API with uvicorn: `python -m canteen_api`."""

import uvicorn

from canteen_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "canteen_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
