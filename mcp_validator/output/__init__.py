from .report import ReportGenerator
from .sarif import to_sarif

__all__ = [
    "ReportGenerator",
    "to_sarif",
]
