"""Utility functions and helpers."""

from keysmith.utils.diagnostics import (
    LoggingDiagnostics,
    NullDiagnostics,
    RecordingDiagnostics,
)
from keysmith.utils.metrics import generation_statistics, satisfaction_rate
from keysmith.utils.visualization import print_generation_summary

__all__ = [
    "LoggingDiagnostics",
    "NullDiagnostics",
    "RecordingDiagnostics",
    "generation_statistics",
    "satisfaction_rate",
    "print_generation_summary",
]
