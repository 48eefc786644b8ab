"""Latest result endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from loguru import logger

from jaimetro.api.dependencies.auth import require_admin
from jaimetro.api.dependencies.db import get_database
from jaimetro.api.schemas import ResultRequest
from jaimetro.core.errors import StorageError
from jaimetro.db.session import Database
from jaimetro.results.repository import RESULT_TYPES, get_result, sanitize_result_value, save_result

router = APIRouter(prefix="/api/result", tags=["result"])


@router.get("")
def read_result(type: str | None = Query(default=None), db: Database = Depends(get_database)):
    if type not in RESULT_TYPES:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"ok": False})

    try:
        value = get_result(db, type)
    except StorageError as e:
        logger.warning(f"[RESULT] Storage unavailable, serving empty result type={type}: {e}")
        return {"ok": True, "value": "", "ephemeral": True}

    return {"ok": True, "value": value}


@router.post("", dependencies=[Depends(require_admin)])
def write_result(body: ResultRequest, db: Database = Depends(get_database)):
    value = sanitize_result_value(body.value)
    try:
        stored = save_result(db, body.type, value)
    except StorageError as e:
        logger.error(f"[RESULT] Result write failed type={body.type}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e
    return {"ok": True, "value": stored}
