"""
LoadCombo Report Generator Module

This module provides HTML report generation and table exports
for ASCE 7 load combination runs.
"""

from .report_generator import (
    ComboReportGenerator,
    envelope_dataframe,
    export_combination_table,
    generate_report,
    scenario_dataframe,
)

__all__ = [
    'ComboReportGenerator',
    'envelope_dataframe',
    'export_combination_table',
    'generate_report',
    'scenario_dataframe',
]
