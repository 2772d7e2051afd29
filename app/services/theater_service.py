import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.auditing import AuditSpan
from app.core.pagination import PageDTO
from app.domain.exceptions import NotFound, Conflict, InvalidInput, Forbidden
from app.domain.seatmap import editor
from app.domain.seatmap.schemas import SeatDraft, SeatMapEdit, SeatMapSession
from app.domain.theaters import crud
from app.domain.theaters.models import Theater, TheaterStatus
from app.domain.theaters.schemas import TheaterReadDTO, TheaterStructureDTO, TheatersQueryDTO, \
    TheaterStatusUpdateDTO
from app.services.seat_category_service import category_colors


logger = logging.getLogger("app.theaters")


async def get_theater(db: AsyncSession, theater_id: int) -> Theater:
    theater = await crud.get_theater_by_id(db, theater_id)
    if not theater:
        raise NotFound("Theater not found", ctx={"theater_id": theater_id})
    return theater


async def list_theaters(db: AsyncSession, query: TheatersQueryDTO) -> PageDTO[TheaterReadDTO]:
    theaters, total = await crud.list_theaters(db, query.page, query.page_size, name=query.name)
    items = [TheaterReadDTO.model_validate(theater) for theater in theaters]
    return PageDTO(
        items=items,
        total=total,
        page=query.page,
        page_size=query.page_size
    )


async def load_seat_map(db: AsyncSession, theater_id: int) -> SeatMapEdit:
    theater = await get_theater(db, theater_id)
    session = SeatMapSession(
        theater_id=theater.id,
        read_only=not theater.is_editable,
        seats=[SeatDraft.model_validate(seat) for seat in theater.seats]
    )
    return editor.build_visual_map(session, await category_colors(db))


async def _validate_structure(
        db: AsyncSession,
        name: str | None,
        session: SeatMapSession,
        theater_id: int | None = None
) -> str:
    if not name:
        raise InvalidInput("Theater name is required")
    if not session.seats:
        raise InvalidInput("Seat map is empty", ctx={"name": name})

    unassigned = editor.unassigned_seats(session)
    if unassigned:
        raise InvalidInput("Every seat needs a category", ctx={"unassigned": len(unassigned)})

    category_ids = {seat.category_id for seat in session.seats}
    unknown = category_ids - await crud.existing_category_ids(db, category_ids)
    if unknown:
        raise InvalidInput("Unknown seat category", ctx={"category_ids": sorted(unknown)})

    if await crud.theater_name_exists(db, name, exclude_id=theater_id):
        raise Conflict("Theater name already exists", ctx={"name": name})
    return name


def _seat_rows(session: SeatMapSession) -> list[dict]:
    return [seat.model_dump() for seat in editor.renumber_rows(session.seats)]


async def _store_seats(db: AsyncSession, theater: Theater, session: SeatMapSession) -> None:
    try:
        await crud.replace_seats(db, theater.id, _seat_rows(session))
    except IntegrityError as e:
        raise Conflict("Seat map conflicts with stored data", ctx={"theater_id": theater.id}) from e


async def create_theater(db: AsyncSession, schema: TheaterStructureDTO) -> Theater:
    async with AuditSpan(
        scope="THEATERS",
        action="CREATE",
        object_type="theater",
        meta={"seats": len(schema.session.seats)}
    ) as span:
        name = await _validate_structure(db, schema.name, schema.session)
        data = {"name": name, "total_seats": len(schema.session.seats), "status": TheaterStatus.ACTIVE}
        theater = await crud.create_theater(db, data)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Theater name already exists", ctx={"name": name}) from e
        span.object_id = span.theater_id = theater.id

        await _store_seats(db, theater, schema.session)
        await db.refresh(theater)
        logger.info("Theater created id=%s seats=%d", theater.id, theater.total_seats)
        return theater


async def update_theater_structure(db: AsyncSession, theater_id: int, schema: TheaterStructureDTO) -> Theater:
    async with AuditSpan(
        scope="THEATERS",
        action="UPDATE_STRUCTURE",
        object_type="theater",
        object_id=theater_id,
        theater_id=theater_id,
        meta={"seats": len(schema.session.seats)}
    ):
        theater = await get_theater(db, theater_id)
        if not theater.is_editable:
            raise Forbidden("Theater is locked", ctx={"theater_id": theater_id})
        if schema.session.theater_id is not None and schema.session.theater_id != theater_id:
            raise InvalidInput(
                "Seat map belongs to another theater",
                ctx={"theater_id": theater_id, "session_theater_id": schema.session.theater_id}
            )

        name = await _validate_structure(db, schema.name, schema.session, theater_id=theater_id)
        await crud.update_theater(theater, {"name": name, "total_seats": len(schema.session.seats)})
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("Theater name already exists", ctx={"theater_id": theater_id, "name": name}) from e

        await _store_seats(db, theater, schema.session)
        await db.refresh(theater)
        logger.info("Theater structure updated id=%s seats=%d", theater.id, theater.total_seats)
        return theater


async def set_theater_status(db: AsyncSession, theater_id: int, schema: TheaterStatusUpdateDTO) -> Theater:
    async with AuditSpan(
        scope="THEATERS",
        action="SET_STATUS",
        object_type="theater",
        object_id=theater_id,
        theater_id=theater_id,
        meta={"status": schema.status.value}
    ):
        theater = await get_theater(db, theater_id)
        await crud.update_theater(theater, {"status": schema.status})
        await db.flush()
        await db.refresh(theater)
        return theater


async def delete_theater(db: AsyncSession, theater_id: int) -> None:
    async with AuditSpan(
        scope="THEATERS",
        action="DELETE",
        object_type="theater",
        object_id=theater_id,
        theater_id=theater_id
    ):
        theater = await get_theater(db, theater_id)
        if not theater.is_editable:
            raise Conflict("Theater is locked and cannot be deleted", ctx={"theater_id": theater_id})
        await crud.delete_theater(db, theater)
        await db.flush()
