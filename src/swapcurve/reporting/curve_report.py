"""
Curve reporting functionality.

Provides formatted console output and CSV export for:
- Seed and calibrated pillars
- Repricing verification of market quotes
- Interpolated quotes at unquoted maturities

CSV files are two-column tables (Maturity,SwapRate or Time,ZeroRate),
values in fixed-point notation with 8 decimals, rows in ascending order.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import logging

import pandas as pd

from ..curves.bootstrap import BootstrapResult
from ..curves.curve import Curve
from ..curves.instruments import SwapQuote

logger = logging.getLogger(__name__)

CSV_FLOAT_FORMAT = "%.8f"

RATE_COLUMNS = frozenset({"market_rate", "fair_rate", "zero_rate", "SwapRate", "ZeroRate"})


@dataclass
class ReportSection:
    """
    A section of a report.

    Attributes:
        title: Section title
        data: Data (DataFrame or dict)
        notes: Optional notes
    """
    title: str
    data: Union[pd.DataFrame, Dict[str, Any]]
    notes: Optional[str] = None


@dataclass
class CurveReport:
    """
    Calibration report.

    Attributes:
        title: Report title
        sections: List of report sections
        metadata: Calibration summary (status, pillar count, ...)
    """
    title: str
    sections: List[ReportSection] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_section(
        self,
        title: str,
        data: Union[pd.DataFrame, Dict[str, Any]],
        notes: Optional[str] = None
    ):
        """Add a section to the report."""
        self.sections.append(ReportSection(title, data, notes))


class ReportFormatter:
    """
    Formats curve reports for console output.

    Rate columns (market, fair and zero rates) are shown as percentages,
    every other float column in fixed point.
    """

    def __init__(self, width: int = 72, precision: int = 6, rate_precision: int = 5):
        """
        Initialize formatter.

        Args:
            width: Console width
            precision: Decimal places for plain floats (NPVs, DFs, times)
            rate_precision: Decimal places for percentage rates
        """
        self.width = width
        self.precision = precision
        self.rate_precision = rate_precision

    def format_number(self, value: float) -> str:
        return f"{value:.{self.precision}f}"

    def format_percent(self, value: float) -> str:
        """Decimal rate as a percentage, 0.015 -> '1.50000%'."""
        return f"{value * 100:.{self.rate_precision}f}%"

    def rule(self, char: str = "-") -> str:
        return char * self.width

    def format_summary(self, metadata: Dict[str, Any]) -> str:
        """Aligned key: value lines for the calibration summary."""
        if not metadata:
            return ""
        pad = max(len(k) for k in metadata)
        lines = []
        for key, value in metadata.items():
            shown = self.format_number(value) if isinstance(value, float) else str(value)
            lines.append(f"  {key.ljust(pad)} : {shown}")
        return "\n".join(lines)

    def format_table(self, df: pd.DataFrame) -> str:
        """Render a pillar or quote table, rates in percent."""
        if df.empty:
            return "  (no rows)"
        formatters = {col: self.format_percent for col in df.columns if col in RATE_COLUMNS}
        return df.to_string(
            index=False,
            formatters=formatters,
            float_format=self.format_number
        )

    def format_report(self, report: CurveReport) -> str:
        """Format entire report for console."""
        lines = [self.rule("="), report.title.center(self.width), self.rule("=")]

        summary = self.format_summary(report.metadata)
        if summary:
            lines.append(summary)

        for section in report.sections:
            lines.extend(["", f"--- {section.title} ---"])

            if isinstance(section.data, pd.DataFrame):
                lines.append(self.format_table(section.data))
            else:
                lines.append(self.format_summary(section.data))

            if section.notes:
                lines.append(f"Note: {section.notes}")

        lines.extend([self.rule("="), "End of Report"])
        return "\n".join(lines)


def generate_calibration_report(result: BootstrapResult) -> pd.DataFrame:
    """
    Per-pillar calibration table.

    Args:
        result: Bootstrap result

    Returns:
        DataFrame with maturity, market_rate, zero_rate, discount_factor,
        status and iterations columns
    """
    rows = []
    for p in result.pillars:
        rows.append({
            "maturity": p.maturity,
            "market_rate": p.quote.rate,
            "zero_rate": p.zero_rate,
            "discount_factor": p.discount_factor,
            "status": p.status.value,
            "iterations": p.iterations,
        })
    return pd.DataFrame(
        rows,
        columns=["maturity", "market_rate", "zero_rate", "discount_factor", "status", "iterations"]
    )


def quotes_to_dataframe(quotes: Iterable[SwapQuote]) -> pd.DataFrame:
    """Quotes as a Maturity,SwapRate table in the given order."""
    return pd.DataFrame(
        [{"Maturity": q.maturity, "SwapRate": q.rate} for q in quotes],
        columns=["Maturity", "SwapRate"],
        dtype=float
    )


def curve_to_dataframe(curve: Curve) -> pd.DataFrame:
    """Curve pillars as a Time,ZeroRate table in time order."""
    return pd.DataFrame(curve.get_nodes(), columns=["Time", "ZeroRate"], dtype=float)


def build_curve_report(
    result: BootstrapResult,
    verification: pd.DataFrame,
    interpolated: Optional[Iterable[SwapQuote]] = None,
    title: str = "Swap Curve Bootstrap"
) -> CurveReport:
    """
    Assemble the calibration, verification and interpolation sections.

    Args:
        result: Bootstrap result
        verification: Output of SwapPricer.verify_quotes
        interpolated: Fair quotes at unquoted maturities
        title: Report title

    Returns:
        CurveReport ready for printing or export
    """
    report = CurveReport(
        title=title,
        metadata={
            "status": result.message,
            "pillars": len(result.curve),
            "max_maturity": result.curve.get_max_maturity(),
            "max_repricing_npv": result.max_repricing_error,
        }
    )

    report.add_section("Zero Curve", curve_to_dataframe(result.curve))
    report.add_section("Calibration", generate_calibration_report(result))
    report.add_section(
        "Verification",
        verification,
        notes="NPV should be near 0 for every calibrated swap (a deposit row has no full coupon period)"
    )

    if interpolated is not None:
        report.add_section("Interpolated Swaps", quotes_to_dataframe(interpolated))

    return report


def export_quotes(quotes: Iterable[SwapQuote], filepath: Union[str, Path]) -> str:
    """
    Export quotes to CSV with a Maturity,SwapRate header.

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    quotes_to_dataframe(quotes).to_csv(path, index=False, float_format=CSV_FLOAT_FORMAT)
    logger.info("Swap quotes exported to %s", path)
    return str(path)


def export_curve(curve: Curve, filepath: Union[str, Path]) -> str:
    """
    Export curve pillars to CSV with a Time,ZeroRate header.

    An empty curve writes the header only.

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    curve_to_dataframe(curve).to_csv(path, index=False, float_format=CSV_FLOAT_FORMAT)
    logger.info("Zero curve pillars exported to %s", path)
    return str(path)


def print_report(report: CurveReport, formatter: Optional[ReportFormatter] = None):
    """
    Print report to console.

    Args:
        report: CurveReport to print
        formatter: Optional custom formatter
    """
    fmt = formatter or ReportFormatter()
    print(fmt.format_report(report))


__all__ = [
    "ReportSection",
    "CurveReport",
    "ReportFormatter",
    "generate_calibration_report",
    "quotes_to_dataframe",
    "curve_to_dataframe",
    "build_curve_report",
    "export_quotes",
    "export_curve",
    "print_report",
]
