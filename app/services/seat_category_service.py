from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.domain.exceptions import NotFound, Conflict
from app.domain.theaters import crud
from app.domain.theaters.colors import generate_color
from app.domain.theaters.models import SeatCategory
from app.domain.theaters.schemas import SeatCategoryCreateDTO, SeatCategoryUpdateDTO


async def get_category(db: AsyncSession, category_id: int) -> SeatCategory:
    category = await crud.get_category_by_id(db, category_id)
    if not category:
        raise NotFound("Seat category not found", ctx={"category_id": category_id})
    return category


async def list_categories(db: AsyncSession) -> list[SeatCategory]:
    return await crud.list_categories(db)


async def category_colors(db: AsyncSession) -> dict[int, str]:
    return {category.id: category.color for category in await crud.list_categories(db)}


async def _ensure_name_free(db: AsyncSession, name: str, exclude_id: int | None = None) -> None:
    if await crud.category_name_exists(db, name, exclude_id=exclude_id):
        raise Conflict("Seat category name already exists", ctx={"name": name})


async def create_category(db: AsyncSession, schema: SeatCategoryCreateDTO) -> SeatCategory:
    async with AuditSpan(
        scope="SEAT_CATEGORIES",
        action="CREATE",
        object_type="seat_category",
        meta={"name": schema.name}
    ) as span:
        await _ensure_name_free(db, schema.name)
        used_colors = list((await category_colors(db)).values())
        data = schema.model_dump(exclude_none=True)
        data["color"] = generate_color(used_colors)
        category = await crud.create_category(db, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Seat category name already exists", ctx={"name": schema.name}) from e
        span.object_id = category.id
        return category


async def update_category(db: AsyncSession, schema: SeatCategoryUpdateDTO, category_id: int) -> SeatCategory:
    fields = list(schema.model_dump(exclude_none=True).keys())
    async with AuditSpan(
        scope="SEAT_CATEGORIES",
        action="UPDATE",
        object_type="seat_category",
        object_id=category_id,
        meta={"fields": fields}
    ):
        category = await get_category(db, category_id)
        if schema.name is not None:
            await _ensure_name_free(db, schema.name, exclude_id=category_id)
        category = await crud.update_category(category, schema.model_dump(exclude_none=True))
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Seat category name already exists", ctx={"category_id": category_id}) from e
        return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    async with AuditSpan(
        scope="SEAT_CATEGORIES",
        action="DELETE",
        object_type="seat_category",
        object_id=category_id
    ):
        category = await get_category(db, category_id)
        if await crud.category_in_use(db, category_id):
            raise Conflict("Seat category is in use", ctx={"category_id": category_id})
        await crud.delete_category(db, category)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Seat category is in use", ctx={"category_id": category_id}) from e
