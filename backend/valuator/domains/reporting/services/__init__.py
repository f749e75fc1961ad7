from .report_assembler import ReportService, assemble, compose_narrative, get_report_service

__all__ = ["ReportService", "assemble", "compose_narrative", "get_report_service"]
