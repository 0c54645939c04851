from typing import Any, Iterable
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

def insert_or_ignore(db: Session, model, values: dict[str, Any], conflict_on: Iterable[str]) -> bool:
    """
    INSERT ... ON CONFLICT (conflict_on) DO NOTHING.
    Returns True when the row was inserted, False when it already existed.
    The conflict target must be backed by a unique constraint or primary key.
    """
    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"insert_or_ignore not supported on {dialect!r}")
    stmt = insert(model).values(**values).on_conflict_do_nothing(index_elements=list(conflict_on))
    return db.execute(stmt).rowcount == 1
