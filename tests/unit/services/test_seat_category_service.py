import pytest
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from app.domain.exceptions import NotFound, Conflict
from app.domain.theaters.schemas import SeatCategoryCreateDTO, SeatCategoryUpdateDTO
from app.services import seat_category_service


def _category(mocker, category_id=1, color="AA3355"):
    return mocker.Mock(id=category_id, color=color)


def _db(mocker):
    db = mocker.Mock()
    db.flush = mocker.AsyncMock()
    return db


@pytest.mark.asyncio
async def test_get_category_not_found_raises(mocker):
    mocker.patch(
        "app.services.seat_category_service.crud.get_category_by_id",
        new=mocker.AsyncMock(return_value=None)
    )

    with pytest.raises(NotFound) as e:
        await seat_category_service.get_category(mocker.Mock(), 3)

    assert str(e.value) == "Seat category not found"
    assert e.value.ctx == {"category_id": 3}


@pytest.mark.asyncio
async def test_category_colors_maps_ids_to_colors(mocker):
    mocker.patch(
        "app.services.seat_category_service.crud.list_categories",
        new=mocker.AsyncMock(return_value=[_category(mocker, 1, "AA3355"), _category(mocker, 2, "3355AA")])
    )

    assert await seat_category_service.category_colors(mocker.Mock()) == {1: "AA3355", 2: "3355AA"}


@pytest.mark.asyncio
async def test_create_category_generates_color_away_from_existing(mocker, auditspan_stub):
    mocker.patch(
        "app.services.seat_category_service.crud.category_name_exists",
        new=mocker.AsyncMock(return_value=False)
    )
    mocker.patch(
        "app.services.seat_category_service.crud.list_categories",
        new=mocker.AsyncMock(return_value=[_category(mocker, 1, "AA3355")])
    )
    generate = mocker.patch("app.services.seat_category_service.generate_color", return_value="2E86C1")
    created = _category(mocker, 9, "2E86C1")
    create = mocker.patch(
        "app.services.seat_category_service.crud.create_category",
        new=mocker.AsyncMock(return_value=created)
    )
    db = _db(mocker)

    result = await seat_category_service.create_category(
        db, SeatCategoryCreateDTO(name=" VIP ", base_price=Decimal("120.00"))
    )

    assert result is created
    generate.assert_called_once_with(["AA3355"])
    create.assert_awaited_once_with(db, {"name": "VIP", "base_price": Decimal("120.00"), "color": "2E86C1"})
    db.flush.assert_awaited_once()
    assert auditspan_stub[0].object_id == 9


@pytest.mark.asyncio
async def test_create_category_duplicate_name_raises_conflict(mocker):
    mocker.patch(
        "app.services.seat_category_service.crud.category_name_exists",
        new=mocker.AsyncMock(return_value=True)
    )
    create = mocker.patch("app.services.seat_category_service.crud.create_category", new=mocker.AsyncMock())

    with pytest.raises(Conflict):
        await seat_category_service.create_category(_db(mocker), SeatCategoryCreateDTO(name="VIP"))

    create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_category_integrity_error_maps_to_conflict(mocker):
    mocker.patch(
        "app.services.seat_category_service.crud.category_name_exists",
        new=mocker.AsyncMock(return_value=False)
    )
    mocker.patch("app.services.seat_category_service.crud.list_categories", new=mocker.AsyncMock(return_value=[]))
    mocker.patch("app.services.seat_category_service.crud.create_category", new=mocker.AsyncMock())
    db = _db(mocker)
    db.flush = mocker.AsyncMock(side_effect=IntegrityError("dup", None, None))

    with pytest.raises(Conflict):
        await seat_category_service.create_category(db, SeatCategoryCreateDTO(name="VIP"))


@pytest.mark.asyncio
async def test_update_category_keeps_color(mocker):
    category = _category(mocker, 4, "AA3355")
    mocker.patch(
        "app.services.seat_category_service.crud.get_category_by_id",
        new=mocker.AsyncMock(return_value=category)
    )
    name_check = mocker.patch(
        "app.services.seat_category_service.crud.category_name_exists",
        new=mocker.AsyncMock(return_value=False)
    )
    update = mocker.patch(
        "app.services.seat_category_service.crud.update_category",
        new=mocker.AsyncMock(return_value=category)
    )
    db = _db(mocker)

    await seat_category_service.update_category(db, SeatCategoryUpdateDTO(name="Balcony"), 4)

    name_check.assert_awaited_once_with(db, "Balcony", exclude_id=4)
    update.assert_awaited_once_with(category, {"name": "Balcony"})


@pytest.mark.asyncio
async def test_update_category_price_only_skips_name_check(mocker):
    category = _category(mocker, 4)
    mocker.patch(
        "app.services.seat_category_service.crud.get_category_by_id",
        new=mocker.AsyncMock(return_value=category)
    )
    name_check = mocker.patch("app.services.seat_category_service.crud.category_name_exists", new=mocker.AsyncMock())
    mocker.patch("app.services.seat_category_service.crud.update_category", new=mocker.AsyncMock(return_value=category))

    await seat_category_service.update_category(_db(mocker), SeatCategoryUpdateDTO(base_price=Decimal("10")), 4)

    name_check.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_category_in_use_raises_conflict(mocker):
    mocker.patch(
        "app.services.seat_category_service.crud.get_category_by_id",
        new=mocker.AsyncMock(return_value=_category(mocker, 2))
    )
    mocker.patch("app.services.seat_category_service.crud.category_in_use", new=mocker.AsyncMock(return_value=True))
    delete = mocker.patch("app.services.seat_category_service.crud.delete_category", new=mocker.AsyncMock())

    with pytest.raises(Conflict) as e:
        await seat_category_service.delete_category(_db(mocker), 2)

    assert str(e.value) == "Seat category is in use"
    delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_unused_category(mocker):
    category = _category(mocker, 2)
    mocker.patch(
        "app.services.seat_category_service.crud.get_category_by_id",
        new=mocker.AsyncMock(return_value=category)
    )
    mocker.patch("app.services.seat_category_service.crud.category_in_use", new=mocker.AsyncMock(return_value=False))
    delete = mocker.patch("app.services.seat_category_service.crud.delete_category", new=mocker.AsyncMock())
    db = _db(mocker)

    await seat_category_service.delete_category(db, 2)

    delete.assert_awaited_once_with(db, category)
