"""Converters from :class:`~chainql.compile.base.Query` to other APIs.

SQLAlchemy converter
--------------------
:func:`to_sqlalchemy` turns a positional-placeholder query into a
:func:`sqlalchemy.text` clause with named binds, for execution through a
SQLAlchemy ``Connection`` or ``Session``.

Install the optional dependency before using this module::

    pip install "chainql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from chainql import QueryBuilder
    from chainql.compile.converters import to_sqlalchemy

    engine = create_engine("sqlite://")
    clause, params = to_sqlalchemy(QueryBuilder("users").where_eq("id", 7).read())
    with engine.connect() as conn:
        rows = conn.execute(clause, params).all()
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from chainql.compile.base import Query
from chainql.errors import MissingDependencyError

if TYPE_CHECKING:
    from sqlalchemy import TextClause

# A colon that text() would read as the start of a named bind.
_BIND_COLON = re.compile(r"(?<![:\w\\]):(?=\w)")


def to_named(query: Query, prefix: str = "p") -> tuple[str, dict[str, Any]]:
    """Rewrite ``?`` markers to ``:p0, :p1, …`` and key the parameters.

    Every ``?`` character is treated as a placeholder, including any inside
    string literals of raw SQL fragments.

    Args:
        query: A built, non-empty query.
        prefix: Bind-name prefix.

    Returns:
        The rewritten statement and a ``{name: value}`` mapping.

    Raises:
        ValueError: If ``query`` is the inert empty query, or if its
            placeholder count does not match its parameter count.
    """
    if query.is_empty:
        raise ValueError("Cannot convert an empty query.")
    if query.placeholder_count != len(query.parameters):
        raise ValueError(
            f"Query has {query.placeholder_count} placeholder(s) but "
            f"{len(query.parameters)} parameter(s)."
        )
    parts = query.statement.split("?")
    out = [parts[0]]
    params: dict[str, Any] = {}
    for index, part in enumerate(parts[1:]):
        name = f"{prefix}{index}"
        out.append(f":{name}")
        out.append(part)
        params[name] = query.parameters[index]
    return "".join(out), params


def to_sqlalchemy(query: Query, prefix: str = "p") -> tuple[TextClause, dict[str, Any]]:
    """Build a SQLAlchemy ``text()`` clause and its bind parameters.

    Args:
        query: A built, non-empty query.
        prefix: Bind-name prefix.

    Returns:
        ``(clause, params)`` ready for ``connection.execute(clause, params)``.
        Colons already present in the statement are escaped so that
        ``text()`` keeps them literal.

    Raises:
        MissingDependencyError: If ``sqlalchemy`` is not installed.
        ValueError: See :func:`to_named`.
    """
    try:
        from sqlalchemy import text as _text
    except ImportError as exc:
        raise MissingDependencyError(
            "SQLAlchemy is required for to_sqlalchemy(). "
            'Install it with: pip install "chainql[sqlalchemy]"',
            package="sqlalchemy",
        ) from exc

    _, params = to_named(query, prefix)
    parts = [_BIND_COLON.sub(r"\\:", part) for part in query.statement.split("?")]
    statement = parts[0] + "".join(
        f":{name}{part}" for name, part in zip(params, parts[1:])
    )
    return _text(statement), params
