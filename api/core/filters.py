"""
Declarative SQL filter composition.

A `Predicate` describes one optional filter: which attribute of an options
object it reads, the SQL fragment it contributes (with `{}` standing in for
the bound placeholder), and an optional transform of the value before
binding. `SqlBuilder` folds a list of predicates into a WHERE clause while
keeping asyncpg's positional `$n` numbering consistent across the whole
statement, including LIMIT/OFFSET and SET lists.

Only column names written in this codebase reach the SQL text; user values
are always bound.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .pagination import Page


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains(value: Any) -> str:
    return f"%{escape_like(str(value))}%"


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


@dataclass(frozen=True)
class Predicate:
    attr: str
    template: str
    transform: Callable[[Any], Any] | None = None

    def fragment(self, options: Any, bind: Callable[[Any], str]) -> str | None:
        value = getattr(options, self.attr, None)
        if not is_present(value):
            return None
        if self.transform is not None:
            value = self.transform(value)
        return self.template.format(bind(value))


class SqlBuilder:
    def __init__(self) -> None:
        self.args: list[Any] = []
        self.conditions: list[str] = []

    def bind(self, value: Any) -> str:
        self.args.append(value)
        return f"${len(self.args)}"

    def where(self, template: str, value: Any) -> "SqlBuilder":
        self.conditions.append(template.format(self.bind(value)))
        return self

    def apply(self, predicates: Iterable[Predicate], options: Any) -> "SqlBuilder":
        for predicate in predicates:
            fragment = predicate.fragment(options, self.bind)
            if fragment is not None:
                self.conditions.append(fragment)
        return self

    def where_clause(self) -> str:
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(self.conditions)

    def page_clause(self, page: Page) -> str:
        limit = self.bind(int(page.limit))
        offset = self.bind(int(page.skip))
        return f"LIMIT {limit} OFFSET {offset}"

    def assignments(self, values: Mapping[str, Any], columns: Mapping[str, str]) -> list[str]:
        """
        Build `column = $n` pairs for the keys of `values` that appear in
        `columns` (field name -> column name). Unknown keys are ignored.
        """
        parts: list[str] = []
        for field, column in columns.items():
            if field in values:
                parts.append(f"{column} = {self.bind(values[field])}")
        return parts
