import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from bell_api.api.deps import require_upload_key
from bell_api.core.errors import MalformedInputError
from bell_api.db.session import get_db
from bell_api.schemas.schedule import UploadOut
from bell_api.services.ingest import ingest_days, ingest_schedules

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

ORPHAN_MESSAGE = "This element was not added because it was not formatted correctly."


async def read_csv_body(request: Request) -> str:
    media_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if media_type != "text/csv":
        raise HTTPException(status_code=400, detail="content type must be text/csv")

    body = await request.body()
    if not body:
        raise HTTPException(status_code=400, detail="no body provided")

    try:
        # utf-8-sig remove BOM de exportações do Excel
        return body.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="body must be utf-8 text")


@router.post(
    "/days",
    response_model=UploadOut,
    response_model_exclude_none=True,
    dependencies=[Depends(require_upload_key)],
)
async def upload_days(request: Request, db: Session = Depends(get_db)):
    """
    Recebe o CSV de dias do calendário (Event Date, Event Caption, Event Description).
    """
    csv_text = await read_csv_body(request)

    try:
        # drain síncrono (SQLAlchemy) fora do event loop
        await run_in_threadpool(ingest_days, db, csv_text)
    except MalformedInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("days upload failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal server error")

    return UploadOut()


@router.post(
    "/schedules",
    response_model=UploadOut,
    response_model_exclude_none=True,
    dependencies=[Depends(require_upload_key)],
)
async def upload_schedules(request: Request, db: Session = Depends(get_db)):
    """
    Recebe o CSV de horários (Description, End Time, Start Time, Block Schedule, Day).
    Linhas sem dia reconhecível voltam como warnings.
    """
    csv_text = await read_csv_body(request)

    try:
        orphans = await run_in_threadpool(ingest_schedules, db, csv_text)
    except MalformedInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("schedules upload failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal server error")

    if orphans:
        return UploadOut(warnings=[{**row, "message": ORPHAN_MESSAGE} for row in orphans])
    return UploadOut()
