# app/services/class_membership.py
"""Mantém o conjunto class_students coerente com Student.class_id."""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from app.models.class_student import class_students

logger = logging.getLogger(__name__)


def _is_member(db: Session, class_id: int, student_id: int) -> bool:
    return db.execute(
        select(class_students.c.student_id).where(
            class_students.c.class_id == class_id,
            class_students.c.student_id == student_id,
        )
    ).first() is not None


def attach(db: Session, class_id: int, student_id: int) -> None:
    if _is_member(db, class_id, student_id):
        return
    db.execute(insert(class_students).values(class_id=class_id, student_id=student_id))
    db.commit()
    logger.debug("Attached student %s to class %s", student_id, class_id)


def detach(db: Session, class_id: int, student_id: int) -> None:
    result = db.execute(
        delete(class_students).where(
            class_students.c.class_id == class_id,
            class_students.c.student_id == student_id,
        )
    )
    db.commit()
    if result.rowcount:
        logger.debug("Detached student %s from class %s", student_id, class_id)


def members(db: Session, class_id: int) -> List[int]:
    rows = db.execute(
        select(class_students.c.student_id)
        .where(class_students.c.class_id == class_id)
        .order_by(class_students.c.student_id)
    ).scalars().all()
    return list(rows)


def clear(db: Session, class_id: int) -> int:
    result = db.execute(delete(class_students).where(class_students.c.class_id == class_id))
    db.commit()
    return result.rowcount or 0
