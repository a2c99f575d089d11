"""
labeltable: dense labeled numeric tables for statistical and phonetic data analysis.

This package provides:
- A numeric table with optional row and column labels
- Row/column reductions, centering, normalization, standardization and ranking
- Label-keyed grouping with mean or median aggregation
- Row/column correlations between tables and the BHEP multivariate normality test
- Structural transforms: transpose, column appends, Cholesky factors, bootstrap
- Aggregate operations over lists of tables
"""

__version__ = "0.1.0"

from labeltable.table import LabeledTable
from labeltable.collection import TableList, sum_tables, have_identical_dimensions
from labeltable.grouping import means_by_row_labels
from labeltable.normality import BHEPResult, normality_test_bhep
from labeltable.correlation import row_correlations, column_correlations
from labeltable.transform import (
    transpose,
    append_columns,
    append_columns_many,
    cholesky_decomposition,
    bootstrap,
    randomize_rows,
)
from labeltable.errors import (
    LabeledTableError,
    InvalidIndex,
    DimensionMismatch,
    NotSquare,
    FactorizationFailed,
    MissingRowLabels,
    LabelNotFound,
    IncompatibleTables,
    LabelsNotGrouped,
    LabelMismatchWarning,
)

__all__ = [
    "__version__",
    "LabeledTable",
    "TableList",
    "sum_tables",
    "have_identical_dimensions",
    "means_by_row_labels",
    "BHEPResult",
    "normality_test_bhep",
    "row_correlations",
    "column_correlations",
    "transpose",
    "append_columns",
    "append_columns_many",
    "cholesky_decomposition",
    "bootstrap",
    "randomize_rows",
    "LabeledTableError",
    "InvalidIndex",
    "DimensionMismatch",
    "NotSquare",
    "FactorizationFailed",
    "MissingRowLabels",
    "LabelNotFound",
    "IncompatibleTables",
    "LabelsNotGrouped",
    "LabelMismatchWarning",
]
