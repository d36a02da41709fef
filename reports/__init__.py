"""
Report exporters — tabular views, indicator assessment, Excel workbook and PDF report.
"""

from .assessment import IndicatorAssessment, assess_indicators, assessment_flags
from .errors import ExportError
from .excel import build_workbook, export_workbook
from .pdf import build_pdf_report, export_pdf_report
from .tables import ancillary_table, class_detail_table, indicator_table, summary_table

__all__ = [
    "ExportError",
    "IndicatorAssessment",
    "ancillary_table",
    "assess_indicators",
    "assessment_flags",
    "build_pdf_report",
    "build_workbook",
    "class_detail_table",
    "export_pdf_report",
    "export_workbook",
    "indicator_table",
    "summary_table",
]
