"""
Canteen API — Request Schema Tests
===================================

What:  Input rules for canteen/menu create and update bodies.
Why:   Everything rejected here must never reach a repository.

What we test:
    ✅ Length, URL and price bounds (inclusive ends accepted)
    ✅ camelCase aliases on input
    ✅ Partial-update convention: omitted vs null, nullable vs NOT NULL
"""

import pytest
from pydantic import ValidationError

from canteen_api.schemas.canteen import CanteenCreate, CanteenUpdate
from canteen_api.schemas.menu import MenuCreate, MenuUpdate


def _menu(**overrides):
    body = {
        "name": "Soto",
        "type": "soup",
        "canteenId": "c-1",
        "price": 15000,
        "imageUrl": None,
        "description": None,
    }
    body.update(overrides)
    return body


class TestCanteenCreate:

    def test_accepts_camel_case_body(self):
        payload = CanteenCreate.model_validate({"name": "Canteen A", "imageUrl": "https://x.test/a.png"})
        assert payload.name == "Canteen A"
        assert payload.image_url == "https://x.test/a.png"

    def test_url_is_kept_verbatim(self):
        """No trailing-slash normalization: the stored value is what was sent."""
        payload = CanteenCreate.model_validate({"name": "A", "imageUrl": "https://x.test"})
        assert payload.image_url == "https://x.test"

    def test_name_bounds(self):
        CanteenCreate.model_validate({"name": "a" * 255, "imageUrl": "https://x.test/a.png"})
        with pytest.raises(ValidationError):
            CanteenCreate.model_validate({"name": "a" * 256, "imageUrl": "https://x.test/a.png"})
        with pytest.raises(ValidationError):
            CanteenCreate.model_validate({"name": "", "imageUrl": "https://x.test/a.png"})

    @pytest.mark.parametrize("url", ["not a url", "", "x.test/a.png"])
    def test_rejects_malformed_url(self, url):
        with pytest.raises(ValidationError):
            CanteenCreate.model_validate({"name": "A", "imageUrl": url})

    def test_requires_both_fields(self):
        with pytest.raises(ValidationError):
            CanteenCreate.model_validate({"name": "A"})


class TestCanteenUpdate:

    def test_only_supplied_fields_change(self):
        payload = CanteenUpdate.model_validate({"id": "c-1", "name": "Renamed"})
        assert payload.changes() == {"name": "Renamed"}

    def test_null_on_not_null_column_is_ignored(self):
        payload = CanteenUpdate.model_validate({"id": "c-1", "name": None, "imageUrl": None})
        assert payload.changes() == {}

    def test_id_bounds(self):
        with pytest.raises(ValidationError):
            CanteenUpdate.model_validate({"id": ""})
        with pytest.raises(ValidationError):
            CanteenUpdate.model_validate({"id": "x" * 101})

    def test_invalid_url_rejected_on_update(self):
        with pytest.raises(ValidationError):
            CanteenUpdate.model_validate({"id": "c-1", "imageUrl": "nope"})


class TestMenuCreate:

    @pytest.mark.parametrize("price", [1, 1_000_000, 12.5])
    def test_price_within_bounds_accepted(self, price):
        assert MenuCreate.model_validate(_menu(price=price)).price == price

    @pytest.mark.parametrize("price", [0, 1_000_001, -5, 0.5])
    def test_price_out_of_bounds_rejected(self, price):
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(_menu(price=price))

    def test_price_must_be_a_number(self):
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(_menu(price="15000"))

    def test_signature_defaults_to_false(self):
        payload = MenuCreate.model_validate(_menu())
        assert payload.signature is False
        assert payload.image_url is None
        assert payload.description is None

    @pytest.mark.parametrize("field", ["imageUrl", "description"])
    def test_nullable_fields_must_be_present(self, field):
        body = _menu()
        del body[field]
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(body)

    def test_signature_must_be_boolean(self):
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(_menu(signature="yes"))

    @pytest.mark.parametrize("field", ["name", "type", "canteenId"])
    def test_string_fields_bounded(self, field):
        MenuCreate.model_validate(_menu(**{field: "a" * 100}))
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(_menu(**{field: "a" * 101}))
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(_menu(**{field: ""}))

    def test_description_bounded_when_present(self):
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(_menu(description=""))
        with pytest.raises(ValidationError):
            MenuCreate.model_validate(_menu(description="d" * 101))

    def test_model_dump_uses_column_names(self):
        values = MenuCreate.model_validate(_menu()).model_dump()
        assert set(values) == {
            "name", "type", "canteen_id", "price", "signature", "image_url", "description",
        }


class TestMenuUpdate:

    def test_omitted_fields_are_not_written(self):
        payload = MenuUpdate.model_validate({"id": "m-1", "price": 20000})
        assert payload.changes() == {"price": 20000}

    def test_null_clears_nullable_columns(self):
        payload = MenuUpdate.model_validate({"id": "m-1", "imageUrl": None, "description": None})
        assert payload.changes() == {"image_url": None, "description": None}

    def test_null_on_not_null_columns_is_ignored(self):
        payload = MenuUpdate.model_validate(
            {"id": "m-1", "name": None, "type": None, "price": None, "signature": None, "canteenId": None}
        )
        assert payload.changes() == {}

    def test_signature_false_is_written(self):
        payload = MenuUpdate.model_validate({"id": "m-1", "signature": False})
        assert payload.changes() == {"signature": False}

    def test_id_allows_up_to_256_chars(self):
        MenuUpdate.model_validate({"id": "x" * 256})
        with pytest.raises(ValidationError):
            MenuUpdate.model_validate({"id": "x" * 257})

    def test_price_bounds_apply_on_update(self):
        with pytest.raises(ValidationError):
            MenuUpdate.model_validate({"id": "m-1", "price": 0})
