from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, Iterable, Optional, Tuple, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bell_api.db.base import Base

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int, str], None]


@dataclass
class DrainResult:
    inserted: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.updated


def log_progress(completed: int, total: int, label: str) -> None:
    logger.info("%d / %d saved - %s", completed, total, label)


def _find_by_key(db: Session, model: Type[Base], key_field: str, key: Any):
    return db.execute(
        select(model).where(getattr(model, key_field) == key)
    ).scalar_one_or_none()


def drain(
    db: Session,
    model: Type[Base],
    key_field: str,
    documents: Iterable[Dict[str, Any]],
    progress: Optional[ProgressFn] = None,
) -> DrainResult:
    """
    Salva cada documento com INSERT; se a chave natural já existe,
    enfileira um replace por chave no fim da fila (last-write-wins).

    Processa a fila em ordem até esvaziar. Qualquer erro que não seja
    chave duplicada aborta o lote (o que já foi commitado fica).
    """
    report = progress or log_progress
    result = DrainResult()
    queue: Deque[Tuple[str, Callable[[], None]]] = deque()
    total = 0
    completed = 0

    def replace(doc: Dict[str, Any]) -> None:
        key = doc[key_field]
        obj = _find_by_key(db, model, key_field, key)
        if obj is None:
            # removido entre o insert e o update
            db.add(model(**doc))
        else:
            for attr, value in doc.items():
                if attr != key_field:
                    setattr(obj, attr, value)
        db.commit()
        result.updated += 1

    def insert(doc: Dict[str, Any]) -> None:
        nonlocal total
        key = doc[key_field]
        try:
            db.add(model(**doc))
            db.commit()
        except IntegrityError:
            db.rollback()
            if _find_by_key(db, model, key_field, key) is None:
                raise
            queue.append((f"{key} (update)", lambda: replace(doc)))
            total += 1
            return
        result.inserted += 1

    for doc in documents:
        key = doc[key_field]
        queue.append((str(key), lambda doc=doc: insert(doc)))
        total += 1

    while queue:
        label, op = queue.popleft()
        try:
            op()
        except Exception:
            db.rollback()
            raise
        completed += 1
        report(completed, total, label)

    logger.info("all %d %s saved", result.total, model.__tablename__)
    return result
