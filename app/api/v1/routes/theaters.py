from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.pagination import PageDTO
from app.domain.seatmap.schemas import SeatMapEdit
from app.domain.theaters.schemas import TheaterReadDTO, TheaterStructureDTO, TheatersQueryDTO, \
    TheaterStatusUpdateDTO
from app.services import theater_service


router = APIRouter(prefix="/theaters", tags=["theaters"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=PageDTO[TheaterReadDTO]
)
async def list_theaters(db: db_dependency, query: Annotated[TheatersQueryDTO, Depends()]):
    return await theater_service.list_theaters(db, query)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TheaterReadDTO
)
async def create_theater(schema: TheaterStructureDTO, db: db_dependency):
    return await theater_service.create_theater(db, schema)


@router.get(
    "/{theater_id}",
    status_code=status.HTTP_200_OK,
    response_model=TheaterReadDTO
)
async def get_theater(theater_id: int, db: db_dependency):
    return await theater_service.get_theater(db, theater_id)


@router.get(
    "/{theater_id}/seat-map",
    status_code=status.HTTP_200_OK,
    response_model=SeatMapEdit
)
async def get_seat_map(theater_id: int, db: db_dependency):
    return await theater_service.load_seat_map(db, theater_id)


@router.put(
    "/{theater_id}/structure",
    status_code=status.HTTP_200_OK,
    response_model=TheaterReadDTO
)
async def update_theater_structure(theater_id: int, schema: TheaterStructureDTO, db: db_dependency):
    return await theater_service.update_theater_structure(db, theater_id, schema)


@router.patch(
    "/{theater_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=TheaterReadDTO
)
async def set_theater_status(theater_id: int, schema: TheaterStatusUpdateDTO, db: db_dependency):
    return await theater_service.set_theater_status(db, theater_id, schema)


@router.delete(
    "/{theater_id}",
    status_code=status.HTTP_204_NO_CONTENT
)
async def delete_theater(theater_id: int, db: db_dependency):
    await theater_service.delete_theater(db, theater_id)
