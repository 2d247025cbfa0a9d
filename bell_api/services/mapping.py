from __future__ import annotations

import csv
import io
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bell_api.core.errors import MalformedInputError
from bell_api.services.normalize import (
    extract_identifier,
    format_internal_date,
    parse_external_date,
)

DAY_COLUMNS = ("Event Date", "Event Caption")
SCHEDULE_COLUMNS = ("Description", "End Time", "Start Time", "Block Schedule", "Day")

_BLOCK_RE = re.compile(r"Block ([A-Z])")


def norm(s: Any) -> str:
    return ("" if s is None else str(s)).strip()


# ----------------------------
# CSV -> linhas
# ----------------------------
def read_csv_rows(text: str, required_columns: Iterable[str] = ()) -> List[Dict[str, str]]:
    """
    Primeira linha = cabeçalho. Linhas vazias são ignoradas.
    Qualquer problema de estrutura vira MalformedInputError.
    """
    # remove BOM (aquele caractere invisível que aparece na primeira coluna)
    text = (text or "").lstrip("\ufeff")
    if not text.strip():
        raise MalformedInputError("empty csv, header row missing")

    reader = csv.DictReader(io.StringIO(text, newline=""), strict=True)
    try:
        headers = [norm(h) for h in (reader.fieldnames or [])]
        reader.fieldnames = headers

        missing = [c for c in required_columns if c not in headers]
        if missing:
            raise MalformedInputError(f"missing columns: {', '.join(missing)}")

        rows: List[Dict[str, str]] = []
        for row in reader:
            if None in row or None in row.values():
                raise MalformedInputError(
                    f"line {reader.line_num}: expected {len(headers)} fields"
                )
            rows.append(row)
    except csv.Error as e:
        raise MalformedInputError(f"line {reader.line_num}: {e}") from e

    return rows


# ----------------------------
# Linha -> documento
# ----------------------------
def map_day_row(row: Mapping[str, str]) -> Optional[Dict[str, str]]:
    caption = norm(row.get("Event Caption"))

    # início/fim de semestre aparecem no calendário mas não são dias de aula
    if "Semester" in caption:
        return None

    if not caption:
        raise MalformedInputError(f"empty Event Caption for date {row.get('Event Date')!r}")

    d = parse_external_date(row.get("Event Date") or "")
    return {
        "date": format_internal_date(d),
        "schedule": extract_identifier(caption),
    }


def map_schedule_event_row(row: Mapping[str, str]) -> Dict[str, str]:
    description = row.get("Description") or ""

    # "Block C - US" -> code "C"
    m = _BLOCK_RE.search(description)
    code = m.group(1) if m else description

    return {
        "name": description.replace(" - US", "", 1),
        "code": code,
        "startTime": (row.get("Start Time") or "").upper(),
        "endTime": (row.get("End Time") or "").upper(),
    }
