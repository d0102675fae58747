"""
Shared CRUD over one table.

`Table` holds everything that differs between entities (columns, sort key,
filter predicates, optional joins, updatable fields) and implements the
common create/find/count/list/update/delete contract once. Feature
repositories wrap it with their own named functions and add the queries
that only make sense for one entity.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from . import db
from .filters import Predicate, SqlBuilder, is_present
from .pagination import Page


@dataclass(frozen=True)
class Join:
    """
    A relation joined only when `predicate` has a value; the predicate is
    then applied against the joined relation.
    """

    sql: str
    predicate: Predicate


@dataclass(frozen=True)
class Source:
    from_clause: str
    predicates: tuple[Predicate, ...]
    distinct: bool = False


@dataclass(frozen=True)
class Table:
    name: str
    alias: str
    columns: tuple[str, ...]
    order_by: str
    predicates: tuple[Predicate, ...] = ()
    joins: tuple[Join, ...] = ()
    updatable: Mapping[str, str] = field(default_factory=dict)

    @property
    def returning(self) -> str:
        return ", ".join(self.columns)

    @property
    def select_list(self) -> str:
        return ", ".join(f"{self.alias}.{c}" for c in self.columns)

    def source(self, options: Any = None) -> Source:
        """
        Pick the FROM clause for a filtered read. Joins are added only for
        the filters that need them; the base predicates always apply.
        """
        from_clause = f"{self.name} {self.alias}"
        predicates: list[Predicate] = []
        for join in self.joins:
            if is_present(getattr(options, join.predicate.attr, None)):
                from_clause += f" {join.sql}"
                predicates.append(join.predicate)
        predicates.extend(self.predicates)
        return Source(
            from_clause=from_clause,
            predicates=tuple(predicates),
            distinct=len(predicates) > len(self.predicates),
        )

    async def insert(self, values: Mapping[str, Any]) -> dict[str, Any]:
        builder = SqlBuilder()
        columns = list(values)
        placeholders = [builder.bind(values[c]) for c in columns]
        row = await db.fetch_one(
            f"""
            INSERT INTO {self.name} ({", ".join(columns)})
            VALUES ({", ".join(placeholders)})
            RETURNING {self.returning}
            """,
            *builder.args,
        )
        if row is None:
            raise RuntimeError(f"Failed to insert into {self.name}.")
        return row

    async def find_by_id(self, record_id: int) -> dict[str, Any] | None:
        return await self.find_one_by("id", record_id)

    async def find_one_by(self, column: str, value: Any) -> dict[str, Any] | None:
        return await db.fetch_one(
            f"""
            SELECT {self.select_list}
            FROM {self.name} {self.alias}
            WHERE {self.alias}.{column} = $1
            """,
            value,
        )

    async def count(self, options: Any = None) -> int:
        source = self.source(options)
        builder = SqlBuilder().apply(source.predicates, options)
        counted = f"DISTINCT {self.alias}.id" if source.distinct else "*"
        total = await db.fetch_val(
            f"""
            SELECT count({counted})
            FROM {source.from_clause}
            {builder.where_clause()}
            """,
            *builder.args,
        )
        return int(total or 0)

    async def find_all(self, options: Any = None, page: Page | None = None) -> list[dict[str, Any]]:
        page = page or Page()
        source = self.source(options)
        builder = SqlBuilder().apply(source.predicates, options)
        where = builder.where_clause()
        window = builder.page_clause(page)
        distinct = "DISTINCT " if source.distinct else ""
        return await db.fetch_all(
            f"""
            SELECT {distinct}{self.select_list}
            FROM {source.from_clause}
            {where}
            ORDER BY {self.order_by}
            {window}
            """,
            *builder.args,
        )

    async def update(self, record_id: int, values: Mapping[str, Any]) -> dict[str, Any] | None:
        builder = SqlBuilder()
        parts = builder.assignments(values, self.updatable)
        if not parts:
            return None
        parts.append("updated_at = now()")
        id_placeholder = builder.bind(record_id)
        return await db.fetch_one(
            f"""
            UPDATE {self.name}
            SET {", ".join(parts)}
            WHERE id = {id_placeholder}
            RETURNING {self.returning}
            """,
            *builder.args,
        )

    async def delete(self, record_id: int) -> bool:
        row = await db.fetch_one(
            f"""
            DELETE FROM {self.name}
            WHERE id = $1
            RETURNING id
            """,
            record_id,
        )
        return row is not None
