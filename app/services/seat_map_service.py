from sqlalchemy.ext.asyncio import AsyncSession
from app.domain.seatmap import editor
from app.domain.seatmap.schemas import SeatMapEdit, PreviewGridDTO, SelectRangeDTO, ToggleSeatDTO, \
    ApplyCategoryDTO, SessionOnlyDTO
from app.services.seat_category_service import category_colors, get_category


def preview(schema: PreviewGridDTO) -> SeatMapEdit:
    return editor.preview_grid(schema.rows, schema.cols, theater_id=schema.theater_id)


async def refresh(db: AsyncSession, schema: SessionOnlyDTO) -> SeatMapEdit:
    return editor.build_visual_map(schema.session, await category_colors(db))


async def toggle_seat(db: AsyncSession, schema: ToggleSeatDTO) -> SeatMapEdit:
    return editor.toggle_seat(schema.session, schema.seat, await category_colors(db))


async def select_range(db: AsyncSession, schema: SelectRangeDTO) -> SeatMapEdit:
    return editor.select_range(schema.session, schema.row, schema.start, schema.end, await category_colors(db))


async def remove_selected(db: AsyncSession, schema: SessionOnlyDTO) -> SeatMapEdit:
    return editor.remove_selected_seats(schema.session, await category_colors(db))


async def apply_category(db: AsyncSession, schema: ApplyCategoryDTO) -> SeatMapEdit:
    if schema.category_id > 0:
        await get_category(db, schema.category_id)
    return editor.apply_category(schema.session, schema.category_id, await category_colors(db))
