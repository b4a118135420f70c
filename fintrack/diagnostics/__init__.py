"""Diagnostic logging package."""

from fintrack.diagnostics.logger import DiagnosticLogger, configure_logging

__all__ = ["DiagnosticLogger", "configure_logging"]
