"""Run pairwise Granger causality tests over a CSV panel of time series."""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Dict, List

# NOTE: In some sandboxed environments OpenMP-backed linear algebra aborts when it cannot
# allocate shared memory. Force a sequential threading layer before importing numpy/scipy.
os.environ.setdefault("MKL_THREADING_LAYER", "SEQ")
os.environ.setdefault("OMP_NUM_THREADS", "1")
os.environ.setdefault("MKL_NUM_THREADS", "1")

import pandas as pd

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from granger_indicator.config import Config, GrangerConfig, setup_logging
from granger_indicator.sweep import run_sweep

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=str, required=True, help="Path to the YAML config file.")
    parser.add_argument("--lag", type=str, default=None, help="Lag size override (int or 'auto').")
    parser.add_argument(
        "--mode",
        choices=["bivariate", "multivariate"],
        default=None,
        help="Sweep mode override.",
    )
    parser.add_argument(
        "--columns",
        nargs="+",
        default=None,
        help="Restrict the sweep to these columns (in this order).",
    )
    parser.add_argument(
        "--nrows",
        type=int,
        default=None,
        help="Optional number of rows to read from the series CSV (for quick smoke tests).",
    )
    return parser.parse_args()


def load_series(
    paths: Dict[str, str],
    files: Dict[str, str],
    time_column: str | None,
    columns: List[str] | None = None,
    nrows: int | None = None,
) -> pd.DataFrame:
    """Load the panel CSV, ordered by time, keeping only numeric series columns."""
    df = pd.read_csv(Path(paths.get("input_dir", ".")) / files["series"], nrows=nrows)
    if time_column:
        if time_column not in df.columns:
            raise KeyError(f"Time column '{time_column}' not found in series data.")
        df = df.sort_values(time_column).reset_index(drop=True).drop(columns=[time_column])
    if columns:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise KeyError(f"Columns not found in series data: {missing}")
        df = df[columns]
    return df.select_dtypes("number")


def build_granger_config(
    granger_cfg: Dict[str, object],
    lag_override: str | None = None,
    mode_override: str | None = None,
) -> GrangerConfig:
    raw = dict(granger_cfg)
    if lag_override is not None:
        raw["lag_size"] = lag_override if lag_override == "auto" else int(lag_override)
    if mode_override is not None:
        raw["mode"] = mode_override
    return GrangerConfig.from_dict(raw)


def main() -> None:
    args = parse_args()
    config = Config.from_yaml(args.config)
    setup_logging(config.get("logging").get("level", "INFO"))
    config.ensure_dirs()

    paths = config.get("paths")
    files = config.get("files")
    granger_cfg = build_granger_config(config.get("granger"), args.lag, args.mode)

    series = load_series(
        paths=paths,
        files=files,
        time_column=files.get("time_column"),
        columns=args.columns,
        nrows=args.nrows,
    )
    result = run_sweep(series, granger_cfg)

    reports_dir = Path(paths.get("reports_dir", PROJECT_ROOT / "reports"))
    reports_dir.mkdir(parents=True, exist_ok=True)
    matrix_path = reports_dir / "granger_matrix.csv"
    pairs_path = reports_dir / "granger_pairs.csv"

    result.p_values.to_csv(matrix_path, index_label="effect")
    result.to_frame().sort_values("p_value", ascending=True).to_csv(pairs_path, index=False)
    logger.info(
        "granger_reports_saved",
        extra={"matrix": str(matrix_path), "pairs": str(pairs_path), "causal_pairs": result.n_causal},
    )


if __name__ == "__main__":
    main()
