"""
Canteen API — Menu Service Unit Tests
======================================

What:  Outcome → envelope/exception mapping in MenuService, mock session.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from canteen_api.exceptions import DatabaseError, DatabaseErrorKind, NotFoundError
from canteen_api.schemas.menu import MenuCreate, MenuUpdate
from canteen_api.services.menu_service import MenuService


def _menu(**overrides):
    row = {
        "id": "m-1",
        "name": "Soto",
        "type": "soup",
        "canteen_id": "c-1",
        "price": 15000.0,
        "signature": False,
        "image_url": None,
        "description": None,
    }
    row.update(overrides)
    return SimpleNamespace(**row)


def _returning(row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    return result


class TestMenuServiceList:

    def setup_method(self):
        self.service = MenuService()

    @pytest.mark.asyncio
    async def test_list_empty_raises_not_found(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.list_menus(mock_db_session)

        assert exc_info.value.message == "menu not found"

    @pytest.mark.asyncio
    async def test_list_with_results(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [_menu(), _menu(id="m-2")]
        mock_db_session.execute.return_value = result

        response = await self.service.list_menus(mock_db_session)

        assert response.count == 2
        assert [item["id"] for item in response.data] == ["m-1", "m-2"]
        assert response.data[0]["canteenId"] == "c-1"


class TestMenuServiceCreate:

    @pytest.mark.asyncio
    async def test_create_inserts_all_columns(self, mock_db_session, menu_payload):
        service = MenuService(id_factory=lambda: "m-new")
        payload = MenuCreate.model_validate({**menu_payload, "canteenId": "c-1"})
        mock_db_session.execute.return_value = _returning(
            _menu(id="m-new", name=payload.name, signature=True)
        )

        response = await service.create_menu(mock_db_session, payload)

        assert response.status_code == 201
        assert response.message == "create menu success"
        params = mock_db_session.execute.await_args.args[0].compile().params
        assert params["id"] == "m-new"
        assert params["canteen_id"] == "c-1"
        assert params["signature"] is True

    @pytest.mark.asyncio
    async def test_create_unknown_canteen_is_constraint_error(self, mock_db_session, menu_payload):
        mock_db_session.execute.side_effect = IntegrityError("INSERT", {}, Exception("FOREIGN KEY"))
        payload = MenuCreate.model_validate({**menu_payload, "canteenId": "ghost"})

        with pytest.raises(DatabaseError) as exc_info:
            await MenuService().create_menu(mock_db_session, payload)

        assert exc_info.value.kind is DatabaseErrorKind.CONSTRAINT
        assert exc_info.value.context["canteen_id"] == "ghost"

    @pytest.mark.asyncio
    async def test_create_without_returned_row(self, mock_db_session, menu_payload):
        mock_db_session.execute.return_value = _returning(None)
        payload = MenuCreate.model_validate({**menu_payload, "canteenId": "c-1"})

        with pytest.raises(DatabaseError) as exc_info:
            await MenuService().create_menu(mock_db_session, payload)

        assert exc_info.value.kind is DatabaseErrorKind.NO_ROW


class TestMenuServiceUpdate:

    def setup_method(self):
        self.service = MenuService()

    @pytest.mark.asyncio
    async def test_update_writes_only_supplied_fields(self, mock_db_session):
        mock_db_session.execute.return_value = _returning(_menu(price=20000.0))

        response = await self.service.update_menu(
            mock_db_session, MenuUpdate.model_validate({"id": "m-1", "price": 20000})
        )

        assert response.message == "Update menu success"
        assert response.data["price"] == 20000.0
        params = mock_db_session.execute.await_args.args[0].compile().params
        assert params["price"] == 20000
        assert "name" not in params

    @pytest.mark.asyncio
    async def test_update_without_changes_reads_row_back(self, mock_db_session):
        mock_db_session.execute.return_value = _returning(_menu())

        response = await self.service.update_menu(
            mock_db_session, MenuUpdate.model_validate({"id": "m-1", "name": None})
        )

        assert response.status_code == 200
        stmt = mock_db_session.execute.await_args.args[0]
        assert stmt.is_select
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, mock_db_session):
        mock_db_session.execute.return_value = _returning(None)

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.update_menu(
                mock_db_session, MenuUpdate.model_validate({"id": "nope", "type": "drink"})
            )

        assert exc_info.value.kind is DatabaseErrorKind.NO_ROW


class TestMenuServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _returning(None)

        with pytest.raises(NotFoundError) as exc_info:
            await MenuService().delete_menu(mock_db_session, "m-404")

        assert exc_info.value.context["resource_id"] == "m-404"

    @pytest.mark.asyncio
    async def test_delete_found(self, mock_db_session):
        mock_db_session.execute.return_value = _returning("m-1")

        response = await MenuService().delete_menu(mock_db_session, "m-1")

        assert response.message == "menu deleted success"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_commit_failure_is_internal_error(self, mock_db_session):
        mock_db_session.execute.return_value = _returning("m-1")
        mock_db_session.commit.side_effect = OperationalError("COMMIT", {}, Exception("gone"))

        with pytest.raises(DatabaseError) as exc_info:
            await MenuService().delete_menu(mock_db_session, "m-1")

        assert exc_info.value.kind is DatabaseErrorKind.TRANSPORT
