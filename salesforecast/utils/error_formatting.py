"""
Error messaging for forecast runs.

Transforms technical exceptions into actionable, understandable messages for
end users (CLI output) and single-line records for logs.
"""

import csv
from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..domain.errors import (
    DegenerateBaselineError,
    EmptySeriesError,
    ForecastError,
    InvalidConfigError,
)


# ============================================================
# Error Severity Levels
# ============================================================

class ErrorSeverity(Enum):
    """Error severity classification for presentation."""

    ERROR = "error"         # Error (action required)
    CRITICAL = "critical"   # Critical (unexpected failure)


# ============================================================
# Error Context
# ============================================================

@dataclass
class ErrorContext:
    """
    Structured error context for user-friendly messaging.

    Attributes:
        message: User-friendly error description
        severity: Error severity level
        technical_details: Technical error info (for logs/debugging)
        context: Additional context (operation, input, parameters)
        recovery_steps: List of recovery actions user can take
        error_code: Optional error code for support/documentation
    """
    message: str
    severity: ErrorSeverity
    technical_details: str
    context: Dict[str, Any] = field(default_factory=dict)
    recovery_steps: list = field(default_factory=list)
    error_code: Optional[str] = None

    def format_for_display(self, include_technical: bool = False) -> str:
        """
        Format error for terminal display.

        Args:
            include_technical: Include technical details in message

        Returns:
            Multi-line message
        """
        lines = [self.message]

        if self.context:
            lines.append("")
            lines.append("Details:")
            for key, value in self.context.items():
                if value is not None:
                    lines.append(f"  - {key}: {value}")

        if self.recovery_steps:
            lines.append("")
            lines.append("Suggested actions:")
            for i, step in enumerate(self.recovery_steps, 1):
                lines.append(f"  {i}. {step}")

        if include_technical and self.technical_details:
            lines.append("")
            lines.append("Technical details:")
            lines.append(f"  {self.technical_details}")

        if self.error_code:
            lines.append("")
            lines.append(f"Error code: {self.error_code}")

        return "\n".join(lines)

    def format_for_log(self) -> str:
        """Format error for structured logging."""
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items() if v is not None)
        return f"[{self.severity.value.upper()}] {self.message} | Context: {context_str} | Technical: {self.technical_details}"


# ============================================================
# Error Formatter
# ============================================================

class ErrorFormatter:
    """Transforms forecast exceptions into ErrorContext objects."""

    @staticmethod
    def format_forecast_error(
        exc: Exception,
        operation: str,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ErrorContext:
        """
        Format an exception raised during a forecast run.

        Args:
            exc: The exception raised
            operation: Operation that failed (e.g., "load_series", "run_forecast")
            additional_context: Additional context data

        Returns:
            ErrorContext with user-friendly message and recovery steps
        """
        context = {"Operation": operation}
        if additional_context:
            context.update(additional_context)

        technical = f"{type(exc).__name__}: {exc}"

        if isinstance(exc, EmptySeriesError):
            return ErrorContext(
                message="No valid sales data found",
                severity=ErrorSeverity.ERROR,
                technical_details=technical,
                context=context,
                recovery_steps=[
                    "Check that the file has a date column and a numeric sales column",
                    "Name the columns e.g. 'date' and 'sales' to help auto-detection",
                    "Remove header or summary rows that are not observations",
                ],
                error_code="FC_001",
            )

        elif isinstance(exc, InvalidConfigError):
            return ErrorContext(
                message=f"Invalid forecast parameters: {exc}",
                severity=ErrorSeverity.ERROR,
                technical_details=technical,
                context=context,
                recovery_steps=[
                    "Forecast periods must be between 1 and 12",
                    "Safety stock must be between 0 and 100 percent",
                    "Starting inventory cannot be negative",
                ],
                error_code="FC_002",
            )

        elif isinstance(exc, DegenerateBaselineError):
            return ErrorContext(
                message="Not enough observations to compute a baseline",
                severity=ErrorSeverity.ERROR,
                technical_details=technical,
                context=context,
                recovery_steps=["Provide at least one sales observation"],
                error_code="FC_003",
            )

        elif isinstance(exc, OSError):
            return ErrorContext(
                message="Cannot read the input file",
                severity=ErrorSeverity.ERROR,
                technical_details=technical,
                context=context,
                recovery_steps=[
                    "Check that the path is correct and the file is readable",
                    "Save the file as UTF-8 CSV with a header row",
                ],
                error_code="FC_004",
            )

        elif isinstance(exc, (UnicodeDecodeError, csv.Error)):
            return ErrorContext(
                message="Cannot decode the input file as CSV",
                severity=ErrorSeverity.ERROR,
                technical_details=technical,
                context=context,
                recovery_steps=[
                    "Save the file as UTF-8 CSV (e.g. \"CSV UTF-8\" in a spreadsheet)",
                    "Check for stray quotes or embedded line breaks in the data",
                ],
                error_code="FC_005",
            )

        elif isinstance(exc, ForecastError):
            return ErrorContext(
                message=f"Forecast failed: {exc}",
                severity=ErrorSeverity.ERROR,
                technical_details=technical,
                context=context,
                recovery_steps=["Check the input data and parameters"],
                error_code="FC_000",
            )

        return ErrorContext(
            message="Unexpected error while generating the forecast",
            severity=ErrorSeverity.CRITICAL,
            technical_details=technical,
            context=context,
            recovery_steps=["Re-run with --log-dir to capture a detailed log"],
            error_code="FC_999",
        )
