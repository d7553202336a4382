"""Unit tests for ClauseAccumulator (WHERE / HAVING grouping)."""
from __future__ import annotations

from chainql.compile.accumulator import ClauseAccumulator


def test_empty_accumulator_renders_nothing(compact_layout):
    acc = ClauseAccumulator()
    assert acc.is_empty
    assert acc.render(compact_layout) == ("", [])


def test_clauses_are_joined_with_their_connectives(compact_layout):
    acc = ClauseAccumulator()
    acc.add_clause("AND", "a = ?", [1])
    acc.add_clause("AND", "b = ?", [2])
    acc.add_clause("OR", "c IS NULL")
    assert acc.render(compact_layout) == ("a = ? AND b = ? OR c IS NULL", [1, 2])


def test_first_clause_never_gets_a_connective(compact_layout):
    acc = ClauseAccumulator()
    acc.add_clause("OR", "a = ?", [1])
    assert acc.render(compact_layout) == ("a = ?", [1])


def test_group_nests_and_suppresses_its_first_connective(compact_layout):
    acc = ClauseAccumulator()
    acc.add_clause("AND", "a = ?", [1])
    acc.open_group("OR")
    acc.add_clause("AND", "b = ?", [2])
    acc.add_clause("OR", "c = ?", [3])
    acc.close_group()
    acc.add_clause("AND", "d = ?", [4])
    text, params = acc.render(compact_layout)
    assert text == "a = ? OR (b = ? OR c = ?) AND d = ?"
    assert params == [1, 2, 3, 4]


def test_group_as_first_node_has_no_connective(compact_layout):
    acc = ClauseAccumulator()
    acc.open_group("OR")
    acc.add_clause("AND", "a = ?", [1])
    acc.close_group()
    assert acc.render(compact_layout)[0] == "(a = ?)"


def test_depth_tracking_and_close_at_root_is_noop():
    acc = ClauseAccumulator()
    assert acc.depth == 0
    acc.close_group()
    assert acc.depth == 0
    acc.open_group("AND")
    acc.open_group("AND")
    assert acc.depth == 2
    acc.close_group()
    assert acc.depth == 1


def test_finalize_closes_every_open_group(compact_layout):
    acc = ClauseAccumulator()
    acc.open_group("AND")
    acc.add_clause("AND", "a = ?", [1])
    acc.open_group("OR")
    acc.add_clause("AND", "b = ?", [2])
    acc.finalize()
    assert acc.depth == 0
    text, _ = acc.render(compact_layout)
    assert text == "(a = ? OR (b = ?))"
    assert text.count("(") == text.count(")")


def test_empty_groups_render_nothing(compact_layout):
    acc = ClauseAccumulator()
    acc.open_group("AND")
    acc.open_group("OR")
    acc.close_group()
    acc.close_group()
    assert acc.is_empty
    acc.add_clause("OR", "a = ?", [1])
    assert not acc.is_empty
    assert acc.render(compact_layout) == ("a = ?", [1])


def test_parameters_follow_placeholder_order_across_depths(compact_layout):
    acc = ClauseAccumulator()
    acc.add_clause("AND", "x = ?", [1])
    acc.open_group("AND")
    acc.add_clause("AND", "y IN (?, ?)", [2, 3])
    acc.open_group("OR")
    acc.add_clause("AND", "z = ?", [4])
    acc.close_group()
    acc.add_clause("AND", "w BETWEEN ? AND ?", [5, 6])
    acc.close_group()
    acc.add_clause("AND", "v = ?", [7])
    text, params = acc.render(compact_layout)
    assert text == "x = ? AND (y IN (?, ?) OR (z = ?) AND w BETWEEN ? AND ?) AND v = ?"
    assert params == [1, 2, 3, 4, 5, 6, 7]
    assert text.count("?") == len(params)


def test_pretty_layout_indents_one_level_per_depth(pretty_layout):
    acc = ClauseAccumulator()
    acc.add_clause("AND", "a = ?", [1])
    acc.open_group("OR")
    acc.add_clause("AND", "b = ?", [2])
    acc.add_clause("OR", "c = ?", [3])
    acc.close_group()
    acc.add_clause("AND", "d = ?", [4])
    text, _ = acc.render(pretty_layout)
    assert text == (
        "  a = ?\n"
        "  OR (\n"
        "    b = ?\n"
        "    OR c = ?\n"
        "  )\n"
        "  AND d = ?"
    )


def test_clause_text_is_stripped(compact_layout):
    acc = ClauseAccumulator()
    acc.add_clause("AND", "  a = ?\n", [1])
    assert acc.render(compact_layout)[0] == "a = ?"
