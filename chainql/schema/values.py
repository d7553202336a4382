"""Typed filter-value shapes used by ``where_eq`` / ``where_not``.

A candidate filter value is classified once into one of four shapes, each a
small frozen model that knows how to render its condition template and the
parameters bound to it::

    NullValue        ->  IS NULL          /  IS NOT NULL
    ListValue        ->  IN (?, ?, ?)     /  NOT IN (?, ?, ?)
    SubQueryValue    ->  IN (SELECT ...)  /  NOT IN (SELECT ...)
    ScalarValue      ->  = ?              /  <> ?

Usage::

    from chainql.schema.values import classify

    shape = classify([1, 2, 3])
    assert shape.kind == "list"
    assert shape.render(negate=False) == ("IN (?, ?, ?)", [1, 2, 3])

Empty lists
-----------
An empty list, tuple or set is classified as ``NullValue``, exactly like
``None``.  A caller passing an empty "include" list therefore gets an
``IS NULL`` filter (``IS NOT NULL`` when negated), not a condition that
matches nothing.  Existing callers rely on this, so it is kept as a
deliberate contract; check for empty lists before filtering if that is not
what you want.

Sets and frozensets are list shapes too.  Their items are bound in
iteration order, which is arbitrary but always matches the placeholders.
"""
from __future__ import annotations

from collections.abc import Set
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class NullValue(BaseModel):
    """``None`` or an empty list: no parameter is bound."""

    model_config = _FROZEN

    kind: Literal["null"] = "null"

    def render(self, negate: bool = False) -> tuple[str, list[Any]]:
        return ("IS NOT NULL" if negate else "IS NULL"), []


class ListValue(BaseModel):
    """A non-empty list: one placeholder per item."""

    model_config = _FROZEN

    kind: Literal["list"] = "list"
    items: tuple[Any, ...]

    def render(self, negate: bool = False) -> tuple[str, list[Any]]:
        placeholders = ", ".join("?" for _ in self.items)
        template = f"IN ({placeholders})"
        if negate:
            template = f"NOT {template}"
        return template, list(self.items)


class SubQueryValue(BaseModel):
    """A finished :class:`~chainql.compile.base.Query` used as an IN list.

    Attributes:
        statement: Sub-query text with its trailing ``;`` already removed.
        parameters: The sub-query's parameters, spliced in at this position.
    """

    model_config = _FROZEN

    kind: Literal["subquery"] = "subquery"
    statement: str
    parameters: tuple[Any, ...] = ()

    def render(self, negate: bool = False) -> tuple[str, list[Any]]:
        template = f"IN ({self.statement})"
        if negate:
            template = f"NOT {template}"
        return template, list(self.parameters)


class ScalarValue(BaseModel):
    """Any other value: a single ``?`` placeholder."""

    model_config = _FROZEN

    kind: Literal["scalar"] = "scalar"
    value: Any

    def render(self, negate: bool = False) -> tuple[str, list[Any]]:
        return ("<> ?" if negate else "= ?"), [self.value]


FilterValue = Annotated[
    Union[NullValue, ListValue, SubQueryValue, ScalarValue],
    Field(discriminator="kind"),
]


def classify(value: Any) -> FilterValue:
    """Map a candidate filter value to its placeholder shape.

    Rules are applied in priority order: null or empty list, non-empty list,
    sub-query, scalar.

    Args:
        value: The value passed to ``where_eq`` and friends.

    Returns:
        The matching ``FilterValue`` variant.
    """
    from chainql.compile.base import Query

    if value is None:
        return NullValue()
    if isinstance(value, (list, tuple, Set)):
        if not value:
            return NullValue()
        return ListValue(items=tuple(value))
    if isinstance(value, Query):
        return SubQueryValue(
            statement=value.statement[:-1] if value.statement.endswith(";") else value.statement,
            parameters=value.parameters,
        )
    return ScalarValue(value=value)


def render_filter(field: str, value: Any, negate: bool = False) -> tuple[str, list[Any]]:
    """Render ``<field> <template>`` for ``value`` and return its parameters."""
    template, params = classify(value).render(negate)
    return f"{field} {template}", params
