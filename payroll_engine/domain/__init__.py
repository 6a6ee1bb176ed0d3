"""Domain layer definitions."""

from .payroll import IngestJob, PayrollDataset

__all__ = [
    "IngestJob",
    "PayrollDataset",
]
