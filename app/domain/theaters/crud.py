from sqlalchemy import select, delete, func, exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.dialects.postgresql import insert
from app.core.pagination import paginate
from app.domain.theaters.models import Theater, Seat, SeatCategory


async def get_theater_by_id(db: AsyncSession, theater_id: int) -> Theater | None:
    stmt = select(Theater).where(Theater.id == theater_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_theaters(db: AsyncSession, page: int, page_size: int, name: str | None = None):
    where = []
    if name:
        where.append(Theater.name.ilike(f"%{name}%"))
    return await paginate(
        db,
        select(Theater),
        page=page,
        page_size=page_size,
        where=where,
        order_by=[Theater.name, Theater.id]
    )


async def theater_name_exists(db: AsyncSession, name: str, exclude_id: int | None = None) -> bool:
    conditions = [func.lower(Theater.name) == name.lower()]
    if exclude_id:
        conditions.append(Theater.id != exclude_id)
    return bool(await db.scalar(select(exists().where(*conditions))))


async def create_theater(db: AsyncSession, data: dict) -> Theater:
    theater = Theater(**data)
    db.add(theater)
    return theater


async def update_theater(theater: Theater, data: dict) -> Theater:
    for key, value in data.items():
        setattr(theater, key, value)
    return theater


async def replace_seats(db: AsyncSession, theater_id: int, data: list[dict]) -> None:
    await db.execute(delete(Seat).where(Seat.theater_id == theater_id))
    if data:
        await db.execute(insert(Seat).values([{"theater_id": theater_id, **d} for d in data]))


async def delete_theater(db: AsyncSession, theater: Theater) -> None:
    await db.delete(theater)


async def get_category_by_id(db: AsyncSession, category_id: int) -> SeatCategory | None:
    stmt = select(SeatCategory).where(SeatCategory.id == category_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def list_categories(db: AsyncSession) -> list[SeatCategory]:
    stmt = select(SeatCategory).order_by(SeatCategory.id)
    result = await db.execute(stmt)
    return result.scalars().all()


async def existing_category_ids(db: AsyncSession, category_ids: set[int]) -> set[int]:
    if not category_ids:
        return set()
    stmt = select(SeatCategory.id).where(SeatCategory.id.in_(category_ids))
    result = await db.execute(stmt)
    return set(result.scalars().all())


async def category_name_exists(db: AsyncSession, name: str, exclude_id: int | None = None) -> bool:
    conditions = [func.lower(SeatCategory.name) == name.lower()]
    if exclude_id:
        conditions.append(SeatCategory.id != exclude_id)
    return bool(await db.scalar(select(exists().where(*conditions))))


async def category_in_use(db: AsyncSession, category_id: int) -> bool:
    return bool(await db.scalar(select(exists().where(Seat.category_id == category_id))))


async def create_category(db: AsyncSession, data: dict) -> SeatCategory:
    category = SeatCategory(**data)
    db.add(category)
    return category


async def update_category(category: SeatCategory, data: dict) -> SeatCategory:
    for key, value in data.items():
        setattr(category, key, value)
    return category


async def delete_category(db: AsyncSession, category: SeatCategory) -> None:
    await db.delete(category)
