from .dashboard_service import DashboardService
from .export_service import ExportService


__all__ = [
    "DashboardService",
    "ExportService",
]
