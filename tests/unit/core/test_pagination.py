import pytest
from sqlalchemy import select
from app.core.pagination import PageDTO, paginate
from app.domain.theaters.models import Theater


@pytest.mark.parametrize(
    "total, page_size, page, pages, has_next",
    [
        (0, 20, 1, 1, False),
        (20, 20, 1, 1, False),
        (21, 20, 1, 2, True),
        (21, 20, 2, 2, False),
        (45, 20, 3, 3, False),
        (7, 0, 1, 1, False),
    ]
)
def test_page_counts(total, page_size, page, pages, has_next):
    dto = PageDTO(items=[], total=total, page=page, page_size=page_size)

    assert dto.pages == pages
    assert dto.has_next is has_next


@pytest.mark.asyncio
async def test_paginate_returns_items_and_total(mocker):
    db = mocker.Mock()
    db.scalar = mocker.AsyncMock(return_value=42)
    scalars_result = mocker.Mock()
    scalars_result.all.return_value = ["first", "second"]
    db.scalars = mocker.AsyncMock(return_value=scalars_result)

    items, total = await paginate(db, select(Theater), page=0, page_size=1000)

    assert items == ["first", "second"]
    assert total == 42
    db.scalar.assert_awaited_once()
    stmt = db.scalars.await_args.args[0]
    sql = str(stmt.compile(compile_kwargs={"literal_binds": True}))
    assert "LIMIT 200 OFFSET 0" in sql


@pytest.mark.asyncio
async def test_paginate_total_defaults_to_zero(mocker):
    db = mocker.Mock()
    db.scalar = mocker.AsyncMock(return_value=None)
    scalars_result = mocker.Mock()
    scalars_result.all.return_value = []
    db.scalars = mocker.AsyncMock(return_value=scalars_result)

    items, total = await paginate(db, select(Theater))

    assert items == []
    assert total == 0
