from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from bell_api.services.mapping import map_schedule_event_row
from bell_api.services.normalize import (
    ORPHAN,
    friendly_name,
    schedule_identifier,
    time_sort_key,
)


@dataclass
class ScheduleGroup:
    name: str
    friendly_name: str
    events: List[Dict[str, str]] = field(default_factory=list)
    # linhas originais do CSV, usadas para reportar órfãos
    rows: List[Mapping[str, str]] = field(default_factory=list)

    def to_document(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "friendly_name": self.friendly_name,
            "events": list(self.events),
        }


def group_schedule_rows(rows: Iterable[Mapping[str, str]]) -> Dict[str, ScheduleGroup]:
    """
    Agrupa as linhas por identificador de horário (ordem de primeira aparição)
    e ordena os eventos de cada grupo pelo horário de início.
    """
    groups: Dict[str, ScheduleGroup] = {}

    for row in rows:
        identifier = schedule_identifier(row)

        group = groups.get(identifier)
        if group is None:
            group = ScheduleGroup(name=identifier, friendly_name=friendly_name(identifier))
            groups[identifier] = group

        group.events.append(map_schedule_event_row(row))
        group.rows.append(row)

    for identifier, group in groups.items():
        if identifier == ORPHAN:
            continue
        # sort() é estável: horários iguais mantêm a ordem do CSV
        group.events.sort(key=lambda e: time_sort_key(e["startTime"]))

    return groups


def persistable_groups(groups: Dict[str, ScheduleGroup]) -> List[ScheduleGroup]:
    return [g for name, g in groups.items() if name != ORPHAN]


def orphan_rows(groups: Dict[str, ScheduleGroup]) -> List[Dict[str, str]]:
    """Linhas órfãs do CSV junto com o evento mapeado (name, code, startTime, endTime)."""
    group = groups.get(ORPHAN)
    if not group:
        return []
    return [{**row, **event} for row, event in zip(group.rows, group.events)]
