from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from bell_api.models.day import Day
from bell_api.models.schedule import Schedule
from bell_api.services.aggregate import group_schedule_rows, orphan_rows, persistable_groups
from bell_api.services.mapping import (
    DAY_COLUMNS,
    SCHEDULE_COLUMNS,
    map_day_row,
    read_csv_rows,
)
from bell_api.services.upsert import DrainResult, ProgressFn, drain

logger = logging.getLogger(__name__)

NO_SCHOOL_SCHEDULE: Dict[str, Any] = {
    "name": "NONE",
    "friendlyName": "No School Day",
    "schedule": [],
}


# ----------------------------
# Upload
# ----------------------------
def ingest_days(db: Session, csv_text: str, progress: Optional[ProgressFn] = None) -> DrainResult:
    logger.info("Parsing and uploading days...")
    rows = read_csv_rows(csv_text, DAY_COLUMNS)

    documents = []
    for row in rows:
        doc = map_day_row(row)
        if doc is not None:
            documents.append(doc)

    logger.info("rows read: %d, days to save: %d", len(rows), len(documents))
    return drain(db, Day, "date", documents, progress)


def ingest_schedules(
    db: Session, csv_text: str, progress: Optional[ProgressFn] = None
) -> List[Dict[str, str]]:
    """Salva os horários e devolve as linhas órfãs (sem horário reconhecível)."""
    logger.info("Parsing and uploading schedules...")
    rows = read_csv_rows(csv_text, SCHEDULE_COLUMNS)

    groups = group_schedule_rows(rows)
    documents = [g.to_document() for g in persistable_groups(groups)]
    drain(db, Schedule, "name", documents, progress)

    orphans = orphan_rows(groups)
    if orphans:
        logger.warning("%d schedule row(s) could not be classified", len(orphans))
    return orphans


# ----------------------------
# Leitura
# ----------------------------
def get_day(db: Session, date_key: str) -> Day | None:
    return db.execute(select(Day).where(Day.date == date_key)).scalar_one_or_none()


def get_schedule_list(db: Session, name: str) -> Dict[str, Any]:
    sch = db.execute(select(Schedule).where(Schedule.name == name)).scalar_one_or_none()
    if not sch:
        return dict(NO_SCHOOL_SCHEDULE, schedule=[])

    return {
        "name": sch.name,
        "friendlyName": sch.friendly_name,
        "schedule": [dict(e) for e in sch.events],
    }
