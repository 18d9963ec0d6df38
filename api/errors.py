"""api.errors

Core rejections rendered as HTTP. Every error body has the same shape:
``{"error": {"code": "<area>.<code>", "message": "..."}}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hashcash.core.exceptions import LedgerError, SpentError, StampError

LEDGER_UNAVAILABLE = "ledger.unavailable"


def stamp_error_status(exc: StampError) -> int:
    if isinstance(exc, SpentError):
        return 409
    return 400


def error_response(status: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"code": code, "message": message}})


async def stamp_error_handler(request: Request, exc: StampError) -> JSONResponse:
    return error_response(stamp_error_status(exc), f"stamp.{exc.code}", str(exc))


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    return error_response(503, LEDGER_UNAVAILABLE, str(exc))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StampError, stamp_error_handler)
    app.add_exception_handler(LedgerError, ledger_error_handler)
