"""
Reporting module for curve calibration.

Provides:
- Console reports (formatted tables)
- CSV export of quotes and curve pillars
"""

from .curve_report import (
    CurveReport,
    ReportFormatter,
    generate_calibration_report,
    build_curve_report,
    export_quotes,
    export_curve,
    print_report,
)


__all__ = [
    "CurveReport",
    "ReportFormatter",
    "generate_calibration_report",
    "build_curve_report",
    "export_quotes",
    "export_curve",
    "print_report",
]
