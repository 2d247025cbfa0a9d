from typing import Any

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bell_api.db.base import Base

class Schedule(Base):
    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    friendly_name: Mapped[str] = mapped_column(String(120), nullable=False)

    # lista ordenada por horário: {"name", "code", "startTime", "endTime"}
    events: Mapped[list[dict[str, Any]]] = mapped_column("schedule", JSON, nullable=False, default=list)
