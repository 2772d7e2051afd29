from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.domain.tickets.schemas import ScanRequestDTO, ScanResultDTO
from app.services import scan_service


router = APIRouter(tags=["ticket-scan"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "/api/TicketScan",
    status_code=status.HTTP_200_OK,
    response_model=ScanResultDTO
)
@router.post(
    "/tickets/scan",
    status_code=status.HTTP_200_OK,
    response_model=ScanResultDTO
)
async def scan_ticket(payload: ScanRequestDTO, db: db_dependency):
    return await scan_service.scan(db, payload)
