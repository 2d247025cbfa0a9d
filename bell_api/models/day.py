from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bell_api.db.base import Base

class Day(Base):
    __tablename__ = "days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # chave natural no formato M-D-YY, ex: "9-5-24"
    date: Mapped[str] = mapped_column(String(10), unique=True, index=True, nullable=False)

    # ex: "US Day 2", "X Day - US"
    schedule: Mapped[str] = mapped_column(String(120), nullable=False)
