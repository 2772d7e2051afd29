from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.domain.seatmap.schemas import SeatMapEdit, PreviewGridDTO, SelectRangeDTO, ToggleSeatDTO, \
    ApplyCategoryDTO, SessionOnlyDTO
from app.services import seat_map_service


router = APIRouter(prefix="/seat-maps", tags=["seat-maps"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "/preview",
    status_code=status.HTTP_200_OK,
    response_model=SeatMapEdit
)
async def preview_grid(schema: PreviewGridDTO):
    return seat_map_service.preview(schema)


@router.post(
    "/render",
    status_code=status.HTTP_200_OK,
    response_model=SeatMapEdit
)
async def render_seat_map(schema: SessionOnlyDTO, db: db_dependency):
    return await seat_map_service.refresh(db, schema)


@router.post(
    "/toggle",
    status_code=status.HTTP_200_OK,
    response_model=SeatMapEdit
)
async def toggle_seat(schema: ToggleSeatDTO, db: db_dependency):
    return await seat_map_service.toggle_seat(db, schema)


@router.post(
    "/select-range",
    status_code=status.HTTP_200_OK,
    response_model=SeatMapEdit
)
async def select_range(schema: SelectRangeDTO, db: db_dependency):
    return await seat_map_service.select_range(db, schema)


@router.post(
    "/remove-selected",
    status_code=status.HTTP_200_OK,
    response_model=SeatMapEdit
)
async def remove_selected_seats(schema: SessionOnlyDTO, db: db_dependency):
    return await seat_map_service.remove_selected(db, schema)


@router.post(
    "/apply-category",
    status_code=status.HTTP_200_OK,
    response_model=SeatMapEdit
)
async def apply_category(schema: ApplyCategoryDTO, db: db_dependency):
    return await seat_map_service.apply_category(db, schema)
