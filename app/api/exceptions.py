import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.domain.exceptions import AppError, NotFound, Conflict, Unprocessable, InvalidInput, Forbidden, \
    ScanRejected, ScanFailure
from app.domain.tickets.schemas import ScanResultDTO
from app.core.ctx import get_request_id

MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger("app.api")

_STATUS_BY_CLASS: dict[type[AppError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Forbidden: status.HTTP_403_FORBIDDEN,
    Conflict: status.HTTP_409_CONFLICT,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    Unprocessable: status.HTTP_422_UNPROCESSABLE_CONTENT,
    AppError: status.HTTP_400_BAD_REQUEST,
}

_TITLES: dict[type[AppError], str] = {
    NotFound: "Not Found",
    Forbidden: "Forbidden",
    Conflict: "Conflict",
    InvalidInput: "Bad Request",
    Unprocessable: "Unprocessable Entity",
    AppError: "Application Error",
}

_SCAN_STATUS: dict[ScanFailure, int] = {
    ScanFailure.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def _status_for(exc: AppError) -> int:
    for cls in type(exc).mro():
        if cls in _STATUS_BY_CLASS:
            return _STATUS_BY_CLASS[cls]
    return status.HTTP_400_BAD_REQUEST


def _title_for(exc: AppError) -> str:
    for cls in type(exc).mro():
        if cls in _TITLES:
            return _TITLES[cls]
    return "Application Error"


def _problem(
    request: Request,
    *,
    http_status: int,
    title: str,
    detail: str | None = None,
    extra: dict | None = None
) -> JSONResponse:
    body = {
        "status": http_status,
        "title": title,
        "detail": detail,
        "instance": str(request.url),
    }
    req_id = get_request_id()
    if req_id:
        body["trace_id"] = req_id
    if extra:
        body.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=http_status, content=body, media_type=MEDIA_TYPE)


def scan_status_for(reason: ScanFailure) -> int:
    return _SCAN_STATUS.get(reason, status.HTTP_400_BAD_REQUEST)


def register_error_handler(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        status_code = _status_for(exc)
        detail = str(exc) or None
        extra = {"context": exc.ctx} if exc.ctx else None
        return _problem(
            request,
            http_status=status_code,
            title=_title_for(exc),
            detail=detail,
            extra=extra
        )

    @app.exception_handler(ScanRejected)
    async def _scan_rejected_handler(request: Request, exc: ScanRejected):
        body = ScanResultDTO(codevalue=str(exc))
        return JSONResponse(status_code=scan_status_for(exc.reason), content=body.model_dump())

    @app.exception_handler(SQLAlchemyError)
    async def _storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Storage failure route=%s", request.url.path, exc_info=exc)
        return _problem(
            request,
            http_status=status.HTTP_503_SERVICE_UNAVAILABLE,
            title="Service Unavailable",
            detail="Storage failure, no changes were saved"
        )
