class ExportError(RuntimeError):
    """Raised when a workbook or PDF report cannot be produced."""
