from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bell_api.db.session import get_db
from bell_api.schemas.day import DayOut
from bell_api.schemas.schedule import ScheduleOut
from bell_api.services.ingest import get_day, get_schedule_list

router = APIRouter(tags=["schedules"])


@router.get("/schedules/{name}", response_model=ScheduleOut)
def read_schedule(name: str, db: Session = Depends(get_db)):
    # sem horário salvo -> "No School Day"
    return get_schedule_list(db, name)


@router.get("/days/{date_key}", response_model=DayOut)
def read_day(date_key: str, db: Session = Depends(get_db)):
    day = get_day(db, date_key)
    if not day:
        raise HTTPException(status_code=404, detail="day not found")
    return day
