from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from app.core.config import SCAN_CATEGORY_TAG


def _code_to_text(v):
    if isinstance(v, bool):
        raise ValueError("Ticket code must be text or a number")
    if isinstance(v, int):
        return str(v)
    return v


class ScanRequestDTO(BaseModel):
    """Scanner payload. Devices disagree on the field name, so all known spellings are accepted."""
    model_config = ConfigDict(extra='ignore')

    code: str | None = None
    barcode: str | None = Field(default=None, validation_alias=AliasChoices("barcode", "Barcode"))
    ticket_code_camel: str | None = Field(default=None, validation_alias=AliasChoices("ticketCode", "TicketCode"))
    ticket_code: str | None = None

    _coerce_codes = field_validator("code", "barcode", "ticket_code_camel", "ticket_code", mode='before')(
        _code_to_text
    )


class ScanResultDTO(BaseModel):
    code: str = SCAN_CATEGORY_TAG
    codevalue: str


class TicketReadDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra='forbid')

    id: int
    ticket_code: int
    status: str
    created_at: datetime
    updated_at: datetime | None
