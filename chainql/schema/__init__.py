"""chainql schema layer: filter-value shapes, clause tree and render profile."""
from chainql.schema.clauses import (
    Clause,
    Group,
    JoinFragment,
    OrderFragment,
    RawColumn,
    WriteColumn,
)
from chainql.schema.profile import RenderProfile
from chainql.schema.values import (
    FilterValue,
    ListValue,
    NullValue,
    ScalarValue,
    SubQueryValue,
    classify,
)

__all__ = [
    "Clause",
    "Group",
    "JoinFragment",
    "OrderFragment",
    "RawColumn",
    "WriteColumn",
    "RenderProfile",
    "FilterValue",
    "ListValue",
    "NullValue",
    "ScalarValue",
    "SubQueryValue",
    "classify",
]
