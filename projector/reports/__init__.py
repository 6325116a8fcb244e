"""Report generation for the asset projector."""

from projector.reports.projection_report import ProjectionReportGenerator

__all__ = ["ProjectionReportGenerator"]
