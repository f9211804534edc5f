# Reporting services - webhook notifications
from .client import ReportingClient
from .schemas import Report, ReportingMessage

__all__ = ["ReportingClient", "Report", "ReportingMessage"]
