from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from app.core.utils.text_utils import normalize_row_char


class SeatKeyDTO(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    row_char: str = Field(pattern=r'^[A-Z]$')
    seat_number: int = Field(ge=1)

    _normalize_row = field_validator("row_char", mode='before')(normalize_row_char)


class SeatDraft(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid', frozen=True)

    row_char: str = Field(pattern=r'^[A-Z]$')
    seat_number: int = Field(ge=1)
    real_seat_number: int = Field(ge=1)
    category_id: int | None = Field(default=None, gt=0)

    _normalize_row = field_validator("row_char", mode='before')(normalize_row_char)

    @property
    def key(self) -> SeatKeyDTO:
        return SeatKeyDTO(row_char=self.row_char, seat_number=self.seat_number)


class SeatMapSession(BaseModel):
    """
    Editing state of one theater's seat map. Sent by the client with every edit
    and returned updated; the server keeps nothing between requests.
    """
    model_config = ConfigDict(extra='forbid')

    theater_id: int | None = None
    read_only: bool = False
    seats: list[SeatDraft] = Field(default_factory=list)
    selected: list[SeatKeyDTO] = Field(default_factory=list)

    @model_validator(mode='after')
    def _check_keys(self):
        keys = {seat.key for seat in self.seats}
        if len(keys) != len(self.seats):
            raise ValueError("Duplicate seat in seat map")
        if len(set(self.selected)) != len(self.selected):
            raise ValueError("Duplicate seat in selection")
        unknown = [k for k in self.selected if k not in keys]
        if unknown:
            raise ValueError("Selection references unknown seats")
        return self


class SeatSlotDTO(BaseModel):
    row_char: str
    seat_number: int
    real_seat_number: int
    category_id: int | None
    display_text: str
    color: str | None = None
    selected: bool = False


class VisualRowDTO(BaseModel):
    label: str | None
    physical_row: str
    slots: list[SeatSlotDTO | None]

    @property
    def is_aisle(self) -> bool:
        return self.label is None


class SeatMapViewDTO(BaseModel):
    rows: list[VisualRowDTO] = Field(default_factory=list)
    row_options: list[str] = Field(default_factory=list)
    column_options: list[int] = Field(default_factory=list)
    seat_count: int = 0


class SeatMapEdit(BaseModel):
    session: SeatMapSession
    view: SeatMapViewDTO
    affected: int = 0
    message: str | None = None


class PreviewGridDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    rows: int
    cols: int
    theater_id: int | None = None


class SelectRangeDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    session: SeatMapSession
    row: str = Field(min_length=1, max_length=1)
    start: int | None = Field(default=None, ge=0)
    end: int | None = Field(default=None, ge=0)

    _normalize_row = field_validator("row", mode='before')(normalize_row_char)


class ToggleSeatDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    session: SeatMapSession
    seat: SeatKeyDTO


class ApplyCategoryDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    session: SeatMapSession
    category_id: int


class SessionOnlyDTO(BaseModel):
    model_config = ConfigDict(extra='forbid')

    session: SeatMapSession
