"""chainql compilation layer: fluent builder → parameterized SQL."""
from chainql.compile.accumulator import ClauseAccumulator
from chainql.compile.base import Query
from chainql.compile.builder import QueryBuilder
from chainql.compile.converters import to_named, to_sqlalchemy
from chainql.compile.layout import Layout

__all__ = [
    "ClauseAccumulator",
    "Layout",
    "Query",
    "QueryBuilder",
    "to_named",
    "to_sqlalchemy",
]
