"""SQLAlchemy adapter – SqlAlchemyQueryRepository (the per-entity query executor)."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Select, Table, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kuhi_query.adapters.sqlalchemy.compiler import compile_ordering, compile_predicate, related_source
from kuhi_query.application.query.memory import to_internal_row
from kuhi_query.application.query.predicates import Predicate, Related
from kuhi_query.application.query.registry import Relation, SearchableFieldRegistry
from kuhi_query.application.query.resolver import QueryPlan
from kuhi_query.kernel.errors import QueryExecutionError, RegistryError
from kuhi_query.observability.logging import get_logger

_log = get_logger(__name__)

_ANCHOR = "_anchor"


def _as_table(table_or_model: Any) -> Table:
    if isinstance(table_or_model, Table):
        return table_or_model
    table = getattr(table_or_model, "__table__", None)
    if table is None:
        raise TypeError(f"{table_or_model!r} is neither a Table nor a mapped class")
    return table


def _relations_in(terms: tuple[Predicate, ...]) -> list[Relation]:
    seen: dict[Relation, None] = {}
    for term in terms:
        if isinstance(term, Related):
            seen.setdefault(term.relation, None)
    return list(seen)


class SqlAlchemyQueryRepository:
    """Execute :class:`QueryPlan` objects against one table.

    Every column named by *registry* must exist on the table, and every
    related table must be registered on the same ``MetaData``; this is checked
    once here so a misconfigured registry fails at wiring time.  Store
    failures surface as :class:`QueryExecutionError`.
    """

    def __init__(
        self,
        session: AsyncSession,
        table_or_model: Any,
        registry: SearchableFieldRegistry,
    ) -> None:
        self._session = session
        self._table = _as_table(table_or_model)
        self._registry = registry

        missing = sorted(registry.columns() - set(self._table.c.keys()))
        if missing:
            raise RegistryError(
                registry.entity,
                f"columns {missing} do not exist on table '{self._table.name}'",
            )
        tables = self._table.metadata.tables
        for name, columns in registry.related_columns().items():
            if name not in tables:
                raise RegistryError(registry.entity, f"related table '{name}' is not in the table's MetaData")
            missing = sorted(columns - set(tables[name].c.keys()))
            if missing:
                raise RegistryError(registry.entity, f"columns {missing} do not exist on table '{name}'")

    @property
    def registry(self) -> SearchableFieldRegistry:
        return self._registry

    def statement(self, plan: QueryPlan) -> Select:
        """Build the SELECT for *plan*.

        Radius searches are paged in process after the exact distance check,
        so their statement carries no LIMIT/OFFSET.
        """
        stmt = (
            select(self._table)
            .where(compile_predicate(plan.predicate, self._table))
            .order_by(*compile_ordering(plan.sort_keys, self._table))
        )
        if not plan.radius_terms:
            stmt = stmt.limit(plan.window.limit).offset(plan.window.offset)
        return stmt

    async def _fetch(self, stmt: Select) -> list[dict[str, Any]]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            _log.error("query_execution_failed", entity=self._registry.entity, error=str(exc))
            raise QueryExecutionError(self._registry.entity, cause=exc) from exc
        return [dict(row) for row in result.mappings().all()]

    async def _attach(self, relation: Relation, rows: list[dict[str, Any]]) -> None:
        """Load the related rows of *rows* under ``row[relation.name]``."""
        key = relation.joins[0].parent_column
        owners = {row[key] for row in rows if row.get(key) is not None}
        for row in rows:
            row[relation.name] = []
        if not owners:
            return
        source, anchor, target = related_source(self._table, relation)
        stmt = select(anchor.label(_ANCHOR), target).select_from(source).where(anchor.in_(list(owners)))
        grouped: dict[Any, list[dict[str, Any]]] = {}
        for related in await self._fetch(stmt):
            grouped.setdefault(related.pop(_ANCHOR), []).append(related)
        for row in rows:
            row[relation.name] = grouped.get(row.get(key), [])

    async def _exact_geo(self, plan: QueryPlan, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        terms = plan.radius_terms
        relations = _relations_in(terms)
        for relation in relations:
            await self._attach(relation, rows)
        matched = [row for row in rows if all(term.is_satisfied_by(row) for term in terms)]
        for row in matched:
            for relation in relations:
                row.pop(relation.name, None)
        return matched

    async def find(self, plan: QueryPlan) -> list[dict[str, Any]]:
        """Return the page of rows for *plan*, keyed in camelCase."""
        rows = await self._fetch(self.statement(plan))
        if plan.radius_terms:
            rows = plan.window.slice(await self._exact_geo(plan, rows))
        return [to_internal_row(row, self._registry.timestamps) for row in rows]

    async def count(self, plan: QueryPlan) -> int:
        """Number of rows matching the predicate, ignoring ordering and paging."""
        where = compile_predicate(plan.predicate, self._table)
        if plan.radius_terms:
            rows = await self._fetch(select(self._table).where(where))
            return len(await self._exact_geo(plan, rows))

        stmt = select(func.count()).select_from(self._table).where(where)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            _log.error("query_execution_failed", entity=self._registry.entity, error=str(exc))
            raise QueryExecutionError(self._registry.entity, cause=exc) from exc
        return int(result.scalar_one())


__all__ = ["SqlAlchemyQueryRepository"]
