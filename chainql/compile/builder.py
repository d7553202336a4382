"""Fluent query builder: accumulate fragments, then build one Query.

``QueryBuilder`` is the top-level orchestrator.  Fluent methods mutate its
:class:`~chainql.compile.state.BuilderState` and return the builder itself;
a terminal method (``read``, ``count``, ``insert``, ``replace``, ``update``,
``delete``, ``insert_all``, ``replace_all``) runs the clause-level builders
in a fixed order and returns a :class:`~chainql.compile.base.Query`::

    query = (
        QueryBuilder.create("users u")
        .select("u.id", "u.name")
        .left_join("teams t", "t.id = u.team_id")
        .where("u.age > ?", 18)
        .group_start()
        .where_eq("t.name", ["core", "infra"])
        .or_where_eq("u.role", "admin")
        .group_end()
        .order_desc("u.created_at")
        .limit(20, 40)
        .read()
    )
    cursor.execute(query.statement, query.parameters)

Sub-builder hierarchy
---------------------
QueryBuilder
  ├── SelectClauseBuilder   (clause_builders.py)
  ├── FromClauseBuilder     (clause_builders.py)
  ├── JoinClauseBuilder     (clause_builders.py)
  ├── WhereClauseBuilder    (clause_builders.py → ClauseAccumulator)
  ├── GroupByClauseBuilder  (clause_builders.py)
  ├── HavingClauseBuilder   (clause_builders.py → ClauseAccumulator)
  ├── OrderByClauseBuilder  (clause_builders.py)
  ├── LimitClauseBuilder    (clause_builders.py)
  ├── SetClauseBuilder      (clause_builders.py)
  ├── InsertClauseBuilder   (clause_builders.py)
  └── BatchValuesBuilder    (clause_builders.py)

Builders are single-owner, not thread-safe objects: construct, chain,
build once, discard.  Building closes any group left open; nothing else is
reset, so building again yields the same text.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from chainql.compile.base import Query
from chainql.compile.clause_builders import (
    BatchValuesBuilder,
    FromClauseBuilder,
    GroupByClauseBuilder,
    HavingClauseBuilder,
    InsertClauseBuilder,
    JoinClauseBuilder,
    LimitClauseBuilder,
    OrderByClauseBuilder,
    SelectClauseBuilder,
    SetClauseBuilder,
    WhereClauseBuilder,
)
from chainql.compile.layout import Layout
from chainql.compile.state import BuilderState
from chainql.schema.clauses import (
    Connective,
    Direction,
    JoinFragment,
    JoinType,
    OrderFragment,
    RawColumn,
    WriteColumn,
)
from chainql.schema.profile import RenderProfile
from chainql.schema.values import render_filter

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Accumulates SQL fragments and builds parameterized statements.

    Args:
        table: FROM / INTO / UPDATE target.  May carry an alias
            (``"users u"``); ``delete()`` with joins uses the last word as
            the alias to delete from.
        profile: Layout options; defaults to single-line output.
    """

    def __init__(self, table: str = "", profile: RenderProfile | None = None) -> None:
        self._profile = profile or RenderProfile()
        self._state = BuilderState(table=table)

    @classmethod
    def create(cls, table: str = "", profile: RenderProfile | None = None) -> "QueryBuilder":
        """Return a new builder for ``table``."""
        return cls(table, profile)

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def profile(self) -> RenderProfile:
        return self._profile

    # ------------------------------------------------------------------
    # Select / table
    # ------------------------------------------------------------------

    def select(self, *cols: str) -> "QueryBuilder":
        """Add columns or expressions to the SELECT list (``*`` when none)."""
        self._state.select.extend(cols)
        return self

    def distinct(self) -> "QueryBuilder":
        self._state.distinct = True
        return self

    def from_(self, table: str) -> "QueryBuilder":
        """Set the FROM / INTO / UPDATE target."""
        self._state.table = table
        return self

    def join(self, table: str, cond: str) -> "QueryBuilder":
        return self._join(table, cond, "INNER")

    def left_join(self, table: str, cond: str) -> "QueryBuilder":
        return self._join(table, cond, "LEFT")

    def right_join(self, table: str, cond: str) -> "QueryBuilder":
        return self._join(table, cond, "RIGHT")

    def _join(self, table: str, cond: str, type_: JoinType) -> "QueryBuilder":
        self._state.joins.append(JoinFragment(table=table, condition=cond, type=type_))
        return self

    # ------------------------------------------------------------------
    # Where
    # ------------------------------------------------------------------

    def where(self, statement: str, *values: Any) -> "QueryBuilder":
        """Add a raw ``AND`` condition; ``values`` bind its ``?`` markers."""
        self._state.where.add_clause("AND", statement, values)
        return self

    def or_where(self, statement: str, *values: Any) -> "QueryBuilder":
        """Add a raw ``OR`` condition."""
        self._state.where.add_clause("OR", statement, values)
        return self

    def where_eq(self, field: str, value: Any) -> "QueryBuilder":
        """``AND field = ?`` / ``IN (…)`` / ``IS NULL`` depending on ``value``.

        ``None`` and empty lists both render ``IS NULL``.
        """
        return self._where_auto("AND", False, field, value)

    def where_not(self, field: str, value: Any) -> "QueryBuilder":
        """``AND field <> ?`` / ``NOT IN (…)`` / ``IS NOT NULL``."""
        return self._where_auto("AND", True, field, value)

    def or_where_eq(self, field: str, value: Any) -> "QueryBuilder":
        return self._where_auto("OR", False, field, value)

    def or_where_not(self, field: str, value: Any) -> "QueryBuilder":
        return self._where_auto("OR", True, field, value)

    def _where_auto(
        self,
        connective: Connective,
        negate: bool,
        field: str,
        value: Any,
    ) -> "QueryBuilder":
        text, params = render_filter(field, value, negate)
        self._state.where.add_clause(connective, text, params)
        return self

    def group_start(self) -> "QueryBuilder":
        """Open a parenthesized group joined with ``AND``."""
        self._state.where.open_group("AND")
        return self

    def or_group_start(self) -> "QueryBuilder":
        """Open a parenthesized group joined with ``OR``."""
        self._state.where.open_group("OR")
        return self

    def group_end(self) -> "QueryBuilder":
        """Close the innermost group; ignored when no group is open."""
        self._state.where.close_group()
        return self

    # ------------------------------------------------------------------
    # Group by / having
    # ------------------------------------------------------------------

    def group_by(self, *cols: str) -> "QueryBuilder":
        self._state.group_by.extend(cols)
        return self

    def having(self, statement: str, *values: Any) -> "QueryBuilder":
        self._state.having.add_clause("AND", statement, values)
        return self

    def or_having(self, statement: str, *values: Any) -> "QueryBuilder":
        self._state.having.add_clause("OR", statement, values)
        return self

    # ------------------------------------------------------------------
    # Order / limit
    # ------------------------------------------------------------------

    def order_by(self, *cols: str) -> "QueryBuilder":
        """Order by ``cols`` without an explicit direction."""
        return self._order(cols, None)

    def order_asc(self, *cols: str) -> "QueryBuilder":
        return self._order(cols, "ASC")

    def order_desc(self, *cols: str) -> "QueryBuilder":
        return self._order(cols, "DESC")

    def _order(self, cols: Sequence[str], direction: Direction | None) -> "QueryBuilder":
        self._state.order_by.extend(
            OrderFragment(expr=col, direction=direction) for col in cols
        )
        return self

    def limit(self, limit: int, offset: int = 0) -> "QueryBuilder":
        """Set LIMIT and OFFSET; 0 leaves either unset."""
        self._state.limit = limit
        self._state.offset = offset
        return self

    # ------------------------------------------------------------------
    # Write payload
    # ------------------------------------------------------------------

    def add(self, col: str, value: Any) -> "QueryBuilder":
        """Write ``value`` to ``col`` as a bound parameter."""
        self._state.values.append(WriteColumn(column=col, value=value))
        return self

    def add_raw(self, col: str, expr: Any) -> "QueryBuilder":
        """Write the literal SQL expression ``expr`` to ``col``; never bound."""
        self._state.raw_values.append(RawColumn(column=col, expr=str(expr)))
        return self

    def add_list(self, data: Mapping[str, Any]) -> "QueryBuilder":
        for col, value in data.items():
            self.add(col, value)
        return self

    def add_raw_list(self, data: Mapping[str, Any]) -> "QueryBuilder":
        for col, expr in data.items():
            self.add_raw(col, expr)
        return self

    def increment(self, col: str, by: Any = 1) -> "QueryBuilder":
        """``col = col + by``, inlined."""
        return self.add_raw(col, f"{col} + {by}")

    def decrement(self, col: str, by: Any = 1) -> "QueryBuilder":
        """``col = col - by``, inlined."""
        return self.add_raw(col, f"{col} - {by}")

    # ------------------------------------------------------------------
    # Terminal calls
    # ------------------------------------------------------------------

    def read(self) -> Query:
        """Build ``SELECT … FROM … JOIN … WHERE … GROUP BY … HAVING …
        ORDER BY … LIMIT …``.

        Parameters: WHERE values, then HAVING values.
        """
        b = self._sub_builders()
        sql, params = self._read_pipeline(b, b["select"].build(self._state))
        return self._finish("read", sql, params)

    def count(self) -> Query:
        """Build the read statement with a ``COUNT(*)`` projection.

        When GROUP BY is present the whole statement becomes a derived
        table, so the result counts groups rather than rows per group.
        """
        b = self._sub_builders()
        label = self._profile.count_label
        sql, params = self._read_pipeline(b, b["select"].build_count(label))
        if self._state.group_by:
            layout = b["layout"]
            sql = (
                f"SELECT COUNT(*) AS {label} FROM {layout.derived(sql)} "
                f"AS {self._profile.count_alias}"
            )
        return self._finish("count", sql, params)

    def insert(self, ignore: bool = False) -> Query:
        """Build ``INSERT [IGNORE] INTO t (cols) VALUES (…)``.

        Parameters: quoted column values in add order.
        """
        verb = "INSERT IGNORE" if ignore else "INSERT"
        sql = self._sub_builders()["insert"].build(self._state, verb)
        return self._finish("insert", sql, self._write_params())

    def replace(self) -> Query:
        """Build ``REPLACE INTO t (cols) VALUES (…)``."""
        sql = self._sub_builders()["insert"].build(self._state, "REPLACE")
        return self._finish("replace", sql, self._write_params())

    def update(self, ignore: bool = False) -> Query:
        """Build ``UPDATE [IGNORE] t JOIN … SET … WHERE …``.

        Parameters: quoted column values in add order, then WHERE values.
        """
        b = self._sub_builders()
        where_sql, where_params = b["where"].build(self._state)
        target = f"IGNORE {self._state.table}" if ignore else self._state.table
        sql = b["layout"].sections(
            [
                f"UPDATE {target}",
                b["join"].build(self._state),
                b["set"].build(self._state),
                where_sql,
            ]
        )
        return self._finish("update", sql, self._write_params() + where_params)

    def delete(self) -> Query:
        """Build ``DELETE [alias] FROM t JOIN … WHERE … ORDER BY … LIMIT …``.

        With joins, the last word of the target (its alias, or the table
        name itself) names the table rows are deleted from.
        """
        b = self._sub_builders()
        keyword = "DELETE FROM"
        if self._state.joins:
            alias = self._state.table.split(" ")[-1]
            keyword = f"DELETE {alias} FROM"
        where_sql, where_params = b["where"].build(self._state)
        sql = b["layout"].sections(
            [
                b["layout"].head(keyword, self._state.table),
                b["join"].build(self._state),
                where_sql,
                b["order"].build(self._state),
                b["limit"].build(self._state),
            ]
        )
        return self._finish("delete", sql, where_params)

    def insert_all(self, rows: Sequence[Mapping[str, Any]], ignore: bool = False) -> Query:
        """Build one multi-row ``INSERT [IGNORE]`` for ``rows``.

        The column list is taken from the first record; every record must
        share that key set (not checked).  An empty ``rows`` returns the
        inert empty :class:`Query`.
        """
        verb = "INSERT IGNORE" if ignore else "INSERT"
        return self._batch(rows, verb)

    def replace_all(self, rows: Sequence[Mapping[str, Any]]) -> Query:
        """Build one multi-row ``REPLACE`` for ``rows``."""
        return self._batch(rows, "REPLACE")

    # ------------------------------------------------------------------
    # Assembly helpers
    # ------------------------------------------------------------------

    def _read_pipeline(self, b: dict, select_sql: str) -> tuple[str, list[Any]]:
        state = self._state
        where_sql, where_params = b["where"].build(state)
        having_sql, having_params = b["having"].build(state)
        sql = b["layout"].sections(
            [
                select_sql,
                b["from"].build(state),
                b["join"].build(state),
                where_sql,
                b["group_by"].build(state),
                having_sql,
                b["order"].build(state),
                b["limit"].build(state),
            ]
        )
        return sql, where_params + having_params

    def _batch(self, rows: Sequence[Mapping[str, Any]], verb: str) -> Query:
        if not rows:
            logger.debug("Empty batch for %r, returning an empty query", self._state.table)
            return Query()
        sql, params = self._sub_builders()["batch"].build(self._state.table, rows, verb)
        return self._finish("batch", sql, params)

    def _write_params(self) -> list[Any]:
        return [c.value for c in self._state.values]

    def _finish(self, shape: str, sql: str, params: list[Any]) -> Query:
        query = Query(sql, tuple(params))
        logger.debug(
            "Built %s statement for %r with %d parameter(s)",
            shape,
            self._state.table,
            len(query.parameters),
        )
        return query

    def _sub_builders(self) -> dict:
        """Construct the clause builders for one build run."""
        layout = Layout.from_profile(self._profile)
        return {
            "layout": layout,
            "select": SelectClauseBuilder(layout),
            "from": FromClauseBuilder(layout),
            "join": JoinClauseBuilder(layout),
            "where": WhereClauseBuilder(layout),
            "group_by": GroupByClauseBuilder(layout),
            "having": HavingClauseBuilder(layout),
            "order": OrderByClauseBuilder(layout),
            "limit": LimitClauseBuilder(layout),
            "set": SetClauseBuilder(layout),
            "insert": InsertClauseBuilder(layout),
            "batch": BatchValuesBuilder(layout),
        }
