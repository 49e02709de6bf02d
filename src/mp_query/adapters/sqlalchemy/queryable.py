"""SQLAlchemy adapter – SqlAlchemyQueryable over a 2.x ``Select``."""
from __future__ import annotations

from typing import Any, Generic, Iterator, TypeVar

from sqlalchemy import Select, func, select

from mp_query.adapters.sqlalchemy.lowering import lower_predicate, order_column
from mp_query.application.predicates import OrderKey, Predicate
from mp_query.config import QuerySettings, get_default_settings
from mp_query.kernel.errors import InvalidArgumentError

T = TypeVar("T")


class SqlAlchemyQueryable(Generic[T]):
    """Immutable queryable that composes a ``Select`` statement.

    Composition never touches the database.  Execution goes through a sync
    ``Session`` (bound at construction, used by :meth:`count` and iteration)
    or an ``AsyncSession`` passed to :meth:`count_async` / :meth:`all_async`.

    Example::

        query = SqlAlchemyQueryable(Product, session)
        count_query, paged_query = params.apply(query)
        rows = paged_query.to_list()
    """

    def __init__(
        self,
        statement: Select[Any] | type[T],
        session: Any = None,
        *,
        entity: type[T] | None = None,
        settings: QuerySettings | None = None,
    ) -> None:
        if isinstance(statement, type):
            entity = entity or statement
            statement = select(statement)
        if entity is None:
            entity = statement.column_descriptions[0]["entity"]
        self._statement: Select[Any] = statement
        self._entity = entity
        self._session = session
        self._settings = settings

    @property
    def element_type(self) -> Any:
        return self._entity

    @property
    def statement(self) -> Select[Any]:
        return self._statement

    @property
    def settings(self) -> QuerySettings:
        return self._settings if self._settings is not None else get_default_settings()

    def _derive(self, statement: Select[Any]) -> "SqlAlchemyQueryable[T]":
        return SqlAlchemyQueryable(statement, self._session, entity=self._entity, settings=self._settings)

    def with_session(self, session: Any) -> "SqlAlchemyQueryable[T]":
        return SqlAlchemyQueryable(self._statement, session, entity=self._entity, settings=self._settings)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def where(self, predicate: Predicate) -> "SqlAlchemyQueryable[T]":
        return self._derive(self._statement.where(lower_predicate(self._entity, predicate, self.settings)))

    def order_by(self, key: OrderKey) -> "SqlAlchemyQueryable[T]":
        statement, column = order_column(self._statement.order_by(None), self._entity, key)
        return self._derive(statement.order_by(column))

    def then_by(self, key: OrderKey) -> "SqlAlchemyQueryable[T]":
        statement, column = order_column(self._statement, self._entity, key)
        return self._derive(statement.order_by(column))

    def skip(self, count: int) -> "SqlAlchemyQueryable[T]":
        return self._derive(self._statement.offset(max(count, 0)))

    def take(self, count: int) -> "SqlAlchemyQueryable[T]":
        return self._derive(self._statement.limit(max(count, 0)))

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def count_statement(self) -> Select[Any]:
        """``SELECT count(*)`` over this statement (ordering dropped)."""
        return select(func.count()).select_from(self._statement.order_by(None).subquery())

    def _require_session(self) -> Any:
        if self._session is None:
            raise InvalidArgumentError(
                "SqlAlchemyQueryable needs a session to execute; use with_session()",
                argument="session",
            )
        return self._session

    def count(self) -> int:
        return int(self._require_session().scalar(self.count_statement()) or 0)

    def to_list(self) -> list[T]:
        return list(self._require_session().scalars(self._statement).all())

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_list())

    async def count_async(self, session: Any) -> int:
        return int(await session.scalar(self.count_statement()) or 0)

    async def all_async(self, session: Any) -> list[T]:
        result = await session.scalars(self._statement)
        return list(result.all())

    def __repr__(self) -> str:
        return f"SqlAlchemyQueryable({self._entity.__name__})"


__all__ = ["SqlAlchemyQueryable"]
