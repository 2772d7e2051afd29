from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator
from app.core.utils.text_utils import strip_text
from app.domain.seatmap.schemas import SeatMapSession
from app.domain.theaters.models import TheaterStatus


class TheaterReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid')

    id: int
    name: str
    total_seats: int
    status: TheaterStatus
    created_at: datetime
    updated_at: datetime


class TheaterStructureDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str | None = Field(default=None, max_length=100)
    session: SeatMapSession

    _strip_name = field_validator("name", mode='before')(strip_text)


class TheaterStatusUpdateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    status: TheaterStatus


class TheatersQueryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=200)
    name: str | None = None


class SeatCategoryCreateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(min_length=1, max_length=50)
    base_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)

    _strip_name = field_validator("name", mode='before')(strip_text)


class SeatCategoryUpdateDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str | None = Field(default=None, min_length=1, max_length=50)
    base_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)

    _strip_name = field_validator("name", mode='before')(strip_text)


class SeatCategoryReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid')

    id: int
    name: str
    base_price: Decimal
    color: str
