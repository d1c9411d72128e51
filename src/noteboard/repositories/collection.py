"""Document-store style data access over SQLAlchemy tables."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, and_, delete, func, select, true, update
from sqlalchemy.orm import Session

from noteboard.db.session import Base

ModelT = TypeVar("ModelT", bound=Base)

__all__ = ["Collection"]


class Collection(Generic[ModelT]):
    """Thin wrapper exposing find/insert/update/delete-by-filter for one model.

    Filters are passed as keyword arguments and matched with equality. A value
    that is a list, tuple or set is matched with ``IN`` instead.
    """

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        """Initialize the collection with a SQLAlchemy session and mapped class."""
        self.session = session
        self.model = model

    def _where(self, filters: dict[str, Any]) -> ColumnElement[bool]:
        clauses = []
        for name, value in filters.items():
            column = getattr(self.model, name)
            if isinstance(value, list | tuple | set | frozenset):
                clauses.append(column.in_(list(value)))
            else:
                clauses.append(column == value)
        return and_(true(), *clauses)

    def get(self, record_id: int) -> ModelT | None:
        """Return a record by primary key."""
        return self.session.get(self.model, record_id)

    def find_one(self, **filters: Any) -> ModelT | None:
        """Return the first record matching ``filters``."""
        stmt = select(self.model).where(self._where(filters)).limit(1)
        return self.session.execute(stmt).scalars().first()

    def find(self, *order_by: Any, **filters: Any) -> list[ModelT]:
        """Return every record matching ``filters`` in the requested order."""
        stmt = select(self.model).where(self._where(filters))
        if order_by:
            stmt = stmt.order_by(*order_by)
        return list(self.session.execute(stmt).scalars())

    def find_ids(self, **filters: Any) -> list[int]:
        """Return only the primary keys of matching records."""
        stmt = select(self.model.id).where(self._where(filters))
        return list(self.session.execute(stmt).scalars())

    def find_one_ci(
        self,
        field: str,
        value: str,
        *,
        exclude_id: int | None = None,
        **filters: Any,
    ) -> ModelT | None:
        """Return a record whose ``field`` equals ``value`` ignoring case.

        Both sides go through SQL ``lower()``, which on SQLite folds ASCII only.

        Args:
            field: Name of a string column.
            value: Value to compare against.
            exclude_id: Primary key to ignore, used when renaming a record in place.
            **filters: Extra equality filters narrowing the search.
        """
        column = getattr(self.model, field)
        stmt = select(self.model).where(func.lower(column) == func.lower(value), self._where(filters))
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        return self.session.execute(stmt.limit(1)).scalars().first()

    def count(self, **filters: Any) -> int:
        """Return the number of records matching ``filters``."""
        stmt = select(func.count()).select_from(self.model).where(self._where(filters))
        return int(self.session.execute(stmt).scalar() or 0)

    def exists(self, **filters: Any) -> bool:
        """Return True if at least one record matches ``filters``."""
        return self.find_one(**filters) is not None

    def insert(self, **values: Any) -> ModelT:
        """Insert a new record and flush so that its primary key is assigned."""
        record = self.model(**values)
        self.session.add(record)
        self.session.flush()
        return record

    def update_many(self, values: dict[str, Any], **filters: Any) -> int:
        """Apply ``values`` to every matching record and return the row count."""
        stmt = (
            update(self.model)
            .where(self._where(filters))
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def delete_many(self, **filters: Any) -> int:
        """Delete every matching record in one statement and return the row count.

        An empty ``IN`` set matches nothing, so callers may pass collected id
        lists without checking for emptiness first.
        """
        if not filters:
            raise ValueError("delete_many requires at least one filter")
        stmt = (
            delete(self.model)
            .where(self._where(filters))
            .execution_options(synchronize_session="fetch")
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def delete(self, record: ModelT) -> None:
        """Delete a single loaded record."""
        self.session.delete(record)
        self.session.flush()

    def values_by_id(self, ids: Iterable[int], field: str) -> dict[int, Any]:
        """Map each id in ``ids`` to one selected column, for populating references."""
        id_list: Sequence[int] = list(set(ids))
        if not id_list:
            return {}
        column = getattr(self.model, field)
        stmt = select(self.model.id, column).where(self.model.id.in_(id_list))
        return {row_id: value for row_id, value in self.session.execute(stmt)}
