"""Tests for label search and replace."""

import pytest

from labeltable.labels import (
    change_column_labels,
    change_row_labels,
    number_of_label_matches,
)
from labeltable.table import LabeledTable


@pytest.fixture
def vowel_table():
    return LabeledTable(
        [[1.0, 2.0]] * 4,
        row_labels=["u_m", "a_f", "u_f", None],
        column_labels=["F1", "F2"],
    )


def test_literal_replace_counts(vowel_table):
    """Test literal replacement reports matches and changed labels."""
    result = change_row_labels(vowel_table, "_f", "-female", max_replacements=0)

    assert vowel_table.row_labels == ["u_m", "a-female", "u-female", None]
    assert result.n_matches == 2
    assert result.n_labels_changed == 2


def test_regex_replace_with_groups(vowel_table):
    """Test regular-expression replacement with a group reference."""
    result = change_row_labels(vowel_table, r"^(\w)_(\w)$", r"\2\1", use_regex=True)

    assert vowel_table.row_labels == ["mu", "fa", "fu", None]
    assert result.n_labels_changed == 3


def test_literal_replace_ignores_regex_syntax():
    """Test literal mode treats metacharacters as text."""
    table = LabeledTable([[0.0]], column_labels=["a.b"])
    change_column_labels(table, ".", "\\", max_replacements=1)

    assert table.column_labels == ["a\\b"]


def test_max_replacements_per_label():
    table = LabeledTable([[0.0]], row_labels=["aaa"])
    result = change_row_labels(table, "a", "b", max_replacements=2)

    assert table.row_labels == ["bba"]
    assert result.n_matches == 2


def test_negative_max_replacements_rejected():
    table = LabeledTable([[0.0]], row_labels=["aaa"])

    with pytest.raises(ValueError, match="max_replacements"):
        change_row_labels(table, "a", "b", max_replacements=-1)

    assert table.row_labels == ["aaa"]


def test_number_of_label_matches(vowel_table):
    """Test exact and pattern label counting."""
    assert number_of_label_matches(vowel_table, "u_m") == 1
    assert number_of_label_matches(vowel_table, "^u", use_regex=True) == 2
    assert number_of_label_matches(vowel_table, "F", by_column=True, use_regex=True) == 2
    assert number_of_label_matches(vowel_table, "") == 0
