from __future__ import annotations

import re
from datetime import date
from typing import Mapping, Tuple

from bell_api.core.errors import MalformedInputError

ORPHAN = "ORPHAN"

_CAPTION_GROUP_RE = re.compile(r"\((.*)\)")
_DIGITS_RE = re.compile(r"(\d+)")
_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(AM|PM)\s*$")


# ----------------------------
# Datas
# ----------------------------
def parse_external_date(value: str) -> date:
    """
    Lê datas exportadas no formato MM/DD/YY (ano = 2000 + YY).
    Ex: "09/05/24" -> date(2024, 9, 5)
    """
    parts = (value or "").strip().split("/")
    if len(parts) != 3 or not all(p.strip().isdecimal() for p in parts):
        raise MalformedInputError(f"invalid date {value!r}, expected MM/DD/YY")

    month, day, year = (int(p) for p in parts)
    try:
        return date(2000 + year, month, day)
    except ValueError as e:
        raise MalformedInputError(f"invalid date {value!r}: {e}") from e


def format_internal_date(d: date) -> str:
    """M-D-YY sem zero à esquerda, ex: date(2024, 9, 5) -> "9-5-24"."""
    return f"{d.month}-{d.day}-{d.year % 100}"


# ----------------------------
# Identificadores
# ----------------------------
def extract_identifier(caption: str) -> str:
    # "US Day 2 (X Day - US)" -> "X Day - US"
    m = _CAPTION_GROUP_RE.search(caption)
    return m.group(1) if m else caption


def extract_cycle_identifier(day_field: str) -> str:
    # "US D4" -> "US Day 4"
    m = _DIGITS_RE.search(day_field or "")
    if not m:
        return ORPHAN
    return f"US Day {m.group(1)}"


def schedule_identifier(row: Mapping[str, str]) -> str:
    """
    "-" na coluna Day indica um horário de bloco (X, A, B...),
    então o identificador vem da coluna Block Schedule.
    """
    day_field = row.get("Day") or ""
    if day_field.strip() != "-":
        return extract_cycle_identifier(day_field)

    block = (row.get("Block Schedule") or "").strip()
    if not block:
        raise MalformedInputError("Day is \"-\" but Block Schedule is empty")
    return block


def friendly_name(identifier: str) -> str:
    return identifier.replace(" - US", "", 1)


# ----------------------------
# Horários
# ----------------------------
def time_sort_key(value: str) -> Tuple[int, int]:
    """
    "H:MM AM/PM" -> (hora 0-23, minuto)
    12 AM -> 0, 12 PM -> 12, demais PM somam 12.
    """
    m = _TIME_RE.match((value or "").upper())
    if not m:
        raise MalformedInputError(f"invalid time {value!r}, expected H:MM AM/PM")

    hour, minute, half = int(m.group(1)), int(m.group(2)), m.group(3)
    if half == "AM" and hour == 12:
        hour = 0
    elif half == "PM" and hour != 12:
        hour += 12
    return hour, minute
