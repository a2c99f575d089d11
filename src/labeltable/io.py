"""Loading and saving tables as CSV or Parquet."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from labeltable.table import LabeledTable

logger = logging.getLogger(__name__)

ROW_LABEL_HEADER = "row_label"


def _read_frame(path: Path, label_col: Optional[str] = None) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        header = pd.read_csv(path, nrows=0).columns
        text_cols = [c for c in (label_col, ROW_LABEL_HEADER) if c is not None and c in header]
        return pd.read_csv(path, dtype={c: str for c in text_cols})
    if suffix in (".parquet", ".pq"):
        return pd.read_parquet(path)
    raise ValueError(f"Cannot infer table format from {path}; expected .csv or .parquet")


def load_table(path: Union[Path, str], label_col: Optional[str] = None) -> LabeledTable:
    """
    Load a labeled table from CSV or Parquet.

    Parameters
    ----------
    path : Path or str
        Input file
    label_col : Optional[str]
        Column to use as row labels. If None, a ``row_label`` column is used
        when present, otherwise the first non-numeric column if there is one.

    Returns
    -------
    LabeledTable
        Numeric columns as data, their names as column labels
    """
    path = Path(path)
    logger.info(f"Loading table from {path}")
    df = _read_frame(path, label_col)

    if label_col is None and ROW_LABEL_HEADER in df.columns:
        label_col = ROW_LABEL_HEADER
    elif label_col is None:
        non_numeric = df.select_dtypes(exclude=[np.number]).columns.tolist()
        label_col = non_numeric[0] if non_numeric else None
    elif label_col not in df.columns:
        raise ValueError(f"Label column '{label_col}' not found in data. Available: {list(df.columns)}")

    row_labels = None
    if label_col is not None:
        row_labels = [None if pd.isna(v) else str(v) for v in df[label_col]]
        df = df.drop(columns=[label_col])

    numeric = df.select_dtypes(include=[np.number])
    dropped = [c for c in df.columns if c not in numeric.columns]
    if dropped:
        logger.warning(f"Ignoring {len(dropped)} non-numeric columns: {dropped[:5]}")
    if numeric.shape[1] == 0:
        raise ValueError("No numeric columns found.")

    table = LabeledTable(
        numeric.to_numpy(dtype=float),
        row_labels=row_labels,
        column_labels=[str(c) for c in numeric.columns],
    )
    logger.info(f"Loaded table: {table.n_rows} rows x {table.n_cols} columns")
    return table


def save_table(table: LabeledTable, path: Union[Path, str]) -> Path:
    """Write a table with its row labels in a leading ``row_label`` column."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = table.to_dataframe()
    df.index.name = ROW_LABEL_HEADER
    df.columns = [f"col{j + 1}" if c is None else c for j, c in enumerate(df.columns)]
    if any(label is not None for label in table.row_labels):
        df = df.reset_index()
    else:
        df = df.reset_index(drop=True)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix in (".parquet", ".pq"):
        df.to_parquet(path, index=False)
    else:
        raise ValueError(f"Cannot infer table format from {path}; expected .csv or .parquet")
    logger.info(f"Wrote table to {path}")
    return path
