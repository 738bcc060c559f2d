"""
Market quote loading.

Quotes come either from CSV files or from the built-in sample set.

Supported CSV layouts:
- instrument_type, maturity, quote   (DEPOSIT / SWAP rows, '#' comments)
- Maturity, SwapRate                 (as written by export_quotes)
"""

from pathlib import Path
from typing import Any, Dict, List, Union
import logging

import pandas as pd

from .curves.bootstrap import parse_quotes
from .curves.instruments import SwapQuote

logger = logging.getLogger(__name__)


# 6M deposit seed plus par swap rates, semi-annual fixed leg
SAMPLE_MARKET_QUOTES: List[Dict[str, Any]] = [
    {"instrument_type": "DEPOSIT", "maturity": 0.5, "quote": 0.0100},
    {"instrument_type": "SWAP", "maturity": 1.0, "quote": 0.0150},
    {"instrument_type": "SWAP", "maturity": 2.0, "quote": 0.0190},
    {"instrument_type": "SWAP", "maturity": 3.0, "quote": 0.0240},
    {"instrument_type": "SWAP", "maturity": 5.0, "quote": 0.0315},
    {"instrument_type": "SWAP", "maturity": 6.0, "quote": 0.0400},
]

# Unquoted maturities priced off the finished curve
SAMPLE_INTERPOLATION_MATURITIES: List[float] = [4.0, 4.7, 5.5]

_COLUMN_ALIASES = {
    "maturity": "maturity",
    "time": "maturity",
    "tenor": "maturity",
    "quote": "quote",
    "rate": "quote",
    "swaprate": "quote",
    "swap_rate": "quote",
    "instrument_type": "instrument_type",
    "type": "instrument_type",
}


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Lower-case column names and map known aliases."""
    renamed = {}
    for c in df.columns:
        key = str(c).strip().lower()
        renamed[c] = _COLUMN_ALIASES.get(key, key)
    return df.rename(columns=renamed)


def load_market_quotes(filepath: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load market quotes from CSV file.

    Expected CSV format:
    instrument_type, maturity, quote

    instrument_type defaults to SWAP when the column is missing.

    Args:
        filepath: Path to CSV file

    Returns:
        List of quote dicts accepted by bootstrap_from_quotes
    """
    df = _standardize_columns(pd.read_csv(filepath, comment="#"))

    missing = {"maturity", "quote"} - set(df.columns)
    if missing:
        raise ValueError(f"Quote file {filepath} is missing columns: {sorted(missing)}")

    if "instrument_type" not in df.columns:
        df["instrument_type"] = "SWAP"

    quotes = []
    for _, row in df.iterrows():
        quotes.append({
            "instrument_type": str(row["instrument_type"]).upper().strip(),
            "maturity": float(row["maturity"]),
            "quote": float(row["quote"]),
        })

    logger.debug("Loaded %s quotes from %s", len(quotes), filepath)
    return quotes


def load_swap_quotes(filepath: Union[str, Path]) -> List[SwapQuote]:
    """
    Load swap quotes from CSV file, dropping any deposit row.

    Reads both the instrument_type layout and the exported
    Maturity,SwapRate layout. Unknown instrument types raise ValueError.
    """
    _, swaps = parse_quotes(load_market_quotes(filepath))
    return swaps


def sample_swap_quotes() -> List[SwapQuote]:
    """Swap quotes of the built-in sample set."""
    _, swaps = parse_quotes(SAMPLE_MARKET_QUOTES)
    return swaps


__all__ = [
    "SAMPLE_MARKET_QUOTES",
    "SAMPLE_INTERPOLATION_MATURITIES",
    "load_market_quotes",
    "load_swap_quotes",
    "sample_swap_quotes",
]
