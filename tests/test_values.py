"""Unit tests for filter-value classification."""
from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from chainql.compile.base import Query
from chainql.schema.values import (
    FilterValue,
    ListValue,
    NullValue,
    ScalarValue,
    SubQueryValue,
    classify,
    render_filter,
)


@pytest.mark.parametrize("value", [None, [], ()])
def test_null_and_empty_lists_classify_as_null(value):
    shape = classify(value)
    assert isinstance(shape, NullValue)
    assert shape.render() == ("IS NULL", [])
    assert shape.render(negate=True) == ("IS NOT NULL", [])


def test_non_empty_list_renders_one_placeholder_per_item():
    shape = classify([1, 2, 3])
    assert isinstance(shape, ListValue)
    assert shape.items == (1, 2, 3)
    assert shape.render() == ("IN (?, ?, ?)", [1, 2, 3])
    assert shape.render(negate=True) == ("NOT IN (?, ?, ?)", [1, 2, 3])


def test_tuple_is_treated_like_a_list():
    assert classify(("a",)).render() == ("IN (?)", ["a"])


def test_subquery_strips_terminator_and_keeps_parameters():
    sub = Query("SELECT id FROM teams WHERE active = ? AND region = ?", (1, "eu"))
    shape = classify(sub)
    assert isinstance(shape, SubQueryValue)
    assert shape.statement == "SELECT id FROM teams WHERE active = ? AND region = ?"
    assert shape.render() == (
        "IN (SELECT id FROM teams WHERE active = ? AND region = ?)",
        [1, "eu"],
    )
    template, params = shape.render(negate=True)
    assert template.startswith("NOT IN (SELECT id")
    assert params == [1, "eu"]


@pytest.mark.parametrize("value", [0, "", False, "abc", 3.5, {"k": "v"}])
def test_everything_else_is_a_scalar(value):
    shape = classify(value)
    assert isinstance(shape, ScalarValue)
    assert shape.render() == ("= ?", [value])
    assert shape.render(negate=True) == ("<> ?", [value])


def test_shapes_are_tagged():
    kinds = [classify(v).kind for v in (None, [1], Query("SELECT 1"), 1)]
    assert kinds == ["null", "list", "subquery", "scalar"]


def test_render_filter_prefixes_field():
    assert render_filter("status", None) == ("status IS NULL", [])
    assert render_filter("status", [], negate=True) == ("status IS NOT NULL", [])
    assert render_filter("id", 7, negate=True) == ("id <> ?", [7])


@pytest.mark.parametrize("value", [{3}, frozenset({3})])
def test_sets_are_treated_like_lists(value):
    shape = classify(value)
    assert isinstance(shape, ListValue)
    assert shape.render() == ("IN (?)", [3])


def test_set_items_align_with_placeholders():
    template, params = classify({1, 2, 3}).render(negate=True)
    assert template == "NOT IN (?, ?, ?)"
    assert sorted(params) == [1, 2, 3]


def test_empty_set_is_null():
    assert isinstance(classify(set()), NullValue)


def test_filter_value_union_validates_by_kind():
    adapter = TypeAdapter(FilterValue)
    assert adapter.validate_python({"kind": "null"}) == NullValue()
    assert adapter.validate_python({"kind": "list", "items": [1, 2]}) == ListValue(items=(1, 2))
    assert adapter.validate_python(classify(5)) == ScalarValue(value=5)
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "range"})
