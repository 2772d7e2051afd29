from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.domain.theaters.schemas import SeatCategoryCreateDTO, SeatCategoryUpdateDTO, SeatCategoryReadDTO
from app.services import seat_category_service


router = APIRouter(prefix="/seat-categories", tags=["seat-categories"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[SeatCategoryReadDTO]
)
async def list_categories(db: db_dependency):
    return await seat_category_service.list_categories(db)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SeatCategoryReadDTO
)
async def create_category(schema: SeatCategoryCreateDTO, db: db_dependency):
    return await seat_category_service.create_category(db, schema)


@router.get(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    response_model=SeatCategoryReadDTO
)
async def get_category(category_id: int, db: db_dependency):
    return await seat_category_service.get_category(db, category_id)


@router.patch(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    response_model=SeatCategoryReadDTO
)
async def update_category(category_id: int, schema: SeatCategoryUpdateDTO, db: db_dependency):
    return await seat_category_service.update_category(db, schema, category_id)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT
)
async def delete_category(category_id: int, db: db_dependency):
    await seat_category_service.delete_category(db, category_id)
