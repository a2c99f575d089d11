"""Configuration dataclasses for table analyses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


@dataclass
class AnalysisConfig:
    """Configuration for analyses run on a table loaded from disk.

    Attributes:
        data_path: Path to the input table (.csv or .parquet)
        label_col: Column holding the row labels (None = first non-numeric column, if any)
        outdir: Output directory for derived tables
        seed: Seed for bootstrap and row randomization (None = unseeded)
        smoothing: BHEP smoothing parameter h (None = data-driven)
        expand: Keep one output row per input row when aggregating by label
        use_medians: Aggregate with medians instead of means
        n_bootstrap: Number of bootstrap replicates to draw
    """

    data_path: Path
    label_col: Optional[str] = None
    outdir: Path = Path("derived")
    seed: Optional[int] = None
    smoothing: Optional[float] = None
    expand: bool = False
    use_medians: bool = False
    n_bootstrap: int = 1

    def __post_init__(self):
        """Validate configuration."""
        self.data_path = Path(self.data_path)
        self.outdir = Path(self.outdir)

        if not self.data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_path}")

        if self.smoothing is not None and self.smoothing <= 0:
            logger.warning(f"Smoothing {self.smoothing} <= 0; using the data-driven default")
            self.smoothing = None

        if self.n_bootstrap < 1:
            raise ValueError(f"n_bootstrap must be >= 1, got {self.n_bootstrap}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dict with Path objects as strings."""
        d = asdict(self)
        d["data_path"] = str(self.data_path)
        d["outdir"] = str(self.outdir)
        return d
