"""Search and replace over row or column labels."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from labeltable.table import LabeledTable


@dataclass
class LabelChangeResult:
    """Counts reported by a label search/replace.

    Attributes:
        n_matches: Total number of replacements made
        n_labels_changed: Number of labels containing at least one match
    """

    n_matches: int
    n_labels_changed: int


def search_and_replace(
    labels: List[Optional[str]],
    search: str,
    replace: str,
    max_replacements: int = 0,
    use_regex: bool = False,
) -> Tuple[List[Optional[str]], LabelChangeResult]:
    """Replace ``search`` in every label; absent labels are left absent.

    Args:
        labels: Label sequence
        search: Literal text or regular expression
        replace: Replacement (may use group references when ``use_regex``)
        max_replacements: Maximum replacements per label, 0 = unlimited
        use_regex: Interpret ``search`` as a regular expression

    Returns:
        Tuple of (new labels, counts)

    Raises:
        ValueError: If max_replacements is negative
    """
    if max_replacements < 0:
        raise ValueError(f"max_replacements must be >= 0 (0 = unlimited), got {max_replacements}")
    pattern = re.compile(search if use_regex else re.escape(search))
    repl = replace if use_regex else (lambda match: replace)
    out: List[Optional[str]] = []
    n_matches = n_changed = 0
    for label in labels:
        if label is None or search == "":
            out.append(label)
            continue
        new, n = pattern.subn(repl, label, count=max_replacements)
        if n > 0:
            n_matches += n
            n_changed += 1
        out.append(new)
    return out, LabelChangeResult(n_matches=n_matches, n_labels_changed=n_changed)


def change_row_labels(
    table: LabeledTable, search: str, replace: str, max_replacements: int = 0, use_regex: bool = False
) -> LabelChangeResult:
    """Search and replace in the row labels, in place."""
    labels, result = search_and_replace(table.row_labels, search, replace, max_replacements, use_regex)
    table.set_row_labels(labels)
    return result


def change_column_labels(
    table: LabeledTable, search: str, replace: str, max_replacements: int = 0, use_regex: bool = False
) -> LabelChangeResult:
    """Search and replace in the column labels, in place."""
    labels, result = search_and_replace(table.column_labels, search, replace, max_replacements, use_regex)
    table.set_column_labels(labels)
    return result


def number_of_label_matches(
    table: LabeledTable, search: str, by_column: bool = False, use_regex: bool = False
) -> int:
    """Count labels equal to ``search`` (or matching it as a regular expression)."""
    if not search:
        return 0
    labels = table.column_labels if by_column else table.row_labels
    if use_regex:
        pattern = re.compile(search)
        return sum(1 for label in labels if label is not None and pattern.search(label))
    return sum(1 for label in labels if label == search)
