"""chainql – Fluent, parameterized SQL statement composition.

Chain calls. Get a statement and its parameters.

Public API
----------
``QueryBuilder``
    Fluent accumulator for SELECT lists, joins, nested WHERE groups,
    GROUP BY / HAVING, ORDER BY, LIMIT and write payloads.  Terminal calls
    (``read``, ``count``, ``insert``, ``replace``, ``update``, ``delete``,
    ``insert_all``, ``replace_all``) return a ``Query``.

``Query``
    Immutable ``(statement, parameters)`` pair with positional ``?``
    placeholders, ready for any DB-API style ``cursor.execute``.

``table``
    Shorthand for ``QueryBuilder.create``.

Re-exported types
-----------------
``RenderProfile``, the filter-value shapes (``NullValue``, ``ListValue``,
``SubQueryValue``, ``ScalarValue``), ``classify``, converters and all error
classes.

Example::

    import sqlite3
    import chainql

    query = (
        chainql.table("users")
        .where("age > ?", 18)
        .where_eq("status", "active")
        .read()
    )
    # query.statement  == "SELECT * FROM users WHERE age > ? AND status = ?;"
    # query.parameters == (18, "active")
    rows = sqlite3.connect("app.db").execute(query.statement, query.parameters)

chainql never executes anything and never validates or escapes
identifiers: table and column names are written as given.
"""

from __future__ import annotations

from chainql.compile.accumulator import ClauseAccumulator
from chainql.compile.base import Query
from chainql.compile.builder import QueryBuilder
from chainql.compile.converters import to_named, to_sqlalchemy
from chainql.errors import ChainQLError, MissingDependencyError, ProfileConfigError
from chainql.schema.profile import RenderProfile
from chainql.schema.values import (
    ListValue,
    NullValue,
    ScalarValue,
    SubQueryValue,
    classify,
)

__all__ = [
    # Core
    "table",
    "QueryBuilder",
    "Query",
    "ClauseAccumulator",
    # Configuration
    "RenderProfile",
    # Filter-value shapes
    "NullValue",
    "ListValue",
    "SubQueryValue",
    "ScalarValue",
    "classify",
    # Converters
    "to_named",
    "to_sqlalchemy",
    # Errors
    "ChainQLError",
    "ProfileConfigError",
    "MissingDependencyError",
]


def table(name: str = "", profile: RenderProfile | None = None) -> QueryBuilder:
    """Return a new :class:`QueryBuilder` targeting ``name``.

    Args:
        name: FROM / INTO / UPDATE target, optionally with an alias.
        profile: Optional layout options; defaults to single-line output.

    Returns:
        A fresh builder.
    """
    return QueryBuilder.create(name, profile)
