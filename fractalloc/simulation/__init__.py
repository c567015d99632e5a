"""
Simulation components for fractalloc.

This module drives allocators with a shared workload and records their
address-space usage step by step.
"""

from .workload import WorkloadGenerator
from .runner import ComparisonRunner
from .report import ReportWriter, read_report, report_header, write_summary

__all__ = [
    "WorkloadGenerator",
    "ComparisonRunner",
    "ReportWriter",
    "read_report",
    "report_header",
    "write_summary",
]
