"""Dialect-specific INSERT ... ON CONFLICT / ON DUPLICATE KEY statements."""

from datetime import datetime
from typing import Dict, Iterable, Sequence

from sqlalchemy.orm import Session


def _dialect_insert(db: Session, model):
    dialect = db.get_bind().dialect.name
    if dialect in ("mysql", "mariadb"):
        from sqlalchemy.dialects.mysql import insert
    elif dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"No upsert support for dialect '{dialect}'")
    return dialect, insert(model)


def insert_or_increment(
    db: Session,
    model,
    values: Dict,
    conflict_columns: Sequence[str],
    counter_column: str,
) -> None:
    """
    Insert ``values`` or, when the key already exists, add one to
    ``counter_column`` of the existing row, as a single statement.
    """
    dialect, stmt = _dialect_insert(db, model)
    stmt = stmt.values(**values)
    counter = model.__table__.c[counter_column]
    if dialect in ("mysql", "mariadb"):
        stmt = stmt.on_duplicate_key_update({counter_column: counter + 1})
    else:
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_={counter_column: counter + 1},
        )
    db.execute(stmt)


def insert_or_replace(
    db: Session,
    model,
    values: Dict,
    conflict_columns: Sequence[str],
    update_columns: Iterable[str],
) -> None:
    """
    Insert ``values`` or overwrite ``update_columns`` of the existing row.

    Column ``onupdate`` hooks do not fire for the conflict branch, so a
    model's ``updated_at`` is set here.
    """
    dialect, stmt = _dialect_insert(db, model)
    stmt = stmt.values(**values)
    if dialect in ("mysql", "mariadb"):
        changes = {column: stmt.inserted[column] for column in update_columns}
    else:
        changes = {column: stmt.excluded[column] for column in update_columns}
    if "updated_at" in model.__table__.c:
        changes["updated_at"] = datetime.utcnow()
    if dialect in ("mysql", "mariadb"):
        stmt = stmt.on_duplicate_key_update(changes)
    else:
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_=changes,
        )
    db.execute(stmt)
