"""IO helpers for loading seed CSVs into pandas DataFrames."""

from __future__ import annotations

import os
from typing import Dict, List

import pandas as pd

from .logging import get_logger

LOGGER = get_logger("utils.io")

DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data"))


def load_csv(name: str) -> pd.DataFrame:
    """Load a CSV by filename from the data directory.

    Every column is read as text so ids like ``0001`` keep their padding; the
    mappers coerce numbers and flags afterwards.
    """

    path = name if os.path.isabs(name) else os.path.join(DATA_DIR, name)
    if not os.path.exists(path):
        raise FileNotFoundError(f"CSV not found: {path}")
    LOGGER.debug("loading_csv path=%s", path)
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def load_records(name: str) -> List[Dict]:
    """Load a seed CSV as a list of plain dict rows with blanks mapped to None."""

    df = load_csv(name)
    df = df.astype(object).where(df != "", None)
    return df.to_dict("records")


__all__ = ["load_csv", "load_records", "DATA_DIR"]
