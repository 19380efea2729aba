"""Find-or-create and atomic counter helpers shared by queue and stats rows.

Uniqueness is enforced by the database: the insert runs inside a SAVEPOINT
and a unique-constraint violation sends the caller back to the lookup
branch instead of failing the request.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy import case, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session

from campus_commons.core.settings import settings
from campus_commons.db.session import Base
from campus_commons.db.time import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class UpsertRetryExhausted(RuntimeError):
    """Raised when the row could neither be found nor inserted."""


def find_or_create(
    db: Session,
    model: type[ModelT],
    *,
    defaults: dict[str, Any] | None = None,
    **lookup: Any,
) -> tuple[ModelT, bool]:
    """Return the row matching ``lookup``, inserting it with ``defaults`` if absent.

    Args:
        db: Active session; the insert is flushed inside a nested transaction.
        model: Mapped class with a unique constraint covering ``lookup``.
        defaults: Extra column values used only when a row is created.
        **lookup: Column equality filters identifying the row.

    Returns:
        ``(instance, created)``.

    Raises:
        UpsertRetryExhausted: If every attempt lost a race and the winner's row
            still could not be read back.
    """
    attempts = max(settings.upsert_max_retries, 1)
    for attempt in range(1, attempts + 1):
        instance = db.query(model).filter_by(**lookup).first()
        if instance is not None:
            return instance, False

        instance = model(**lookup, **(defaults or {}))
        try:
            with db.begin_nested():
                db.add(instance)
        except IntegrityError:
            logger.info(
                "Lost insert race on %s %s (attempt %d/%d); retrying lookup",
                model.__tablename__,
                lookup,
                attempt,
                attempts,
            )
            continue
        return instance, True

    instance = db.query(model).filter_by(**lookup).first()
    if instance is not None:
        return instance, False
    raise UpsertRetryExhausted(f"Could not find or create {model.__tablename__} row {lookup}")


def adjust_counter(
    db: Session,
    key_column: InstrumentedAttribute[Any],
    key: Any,
    counter: InstrumentedAttribute[int],
    delta: int,
    *,
    touch: InstrumentedAttribute[Any] | None = None,
) -> None:
    """Atomically add ``delta`` to ``counter`` on the row where ``key_column == key``.

    Decrements are clamped at zero in SQL, so concurrent toggles can never
    drive the stored value negative. In-session instances are not
    synchronised; refresh them if the new value is needed.
    """
    if delta >= 0:
        value: Any = counter + delta
    else:
        value = case((counter + delta < 0, 0), else_=counter + delta)

    values: dict[str, Any] = {counter.key: value}
    if touch is not None:
        values[touch.key] = utcnow()

    db.execute(
        update(key_column.class_)
        .where(key_column == key)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
