"""Reporting module for letspec run output."""

from letspec.reports.base import Reporter
from letspec.reports.console import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "Reporter",
]
