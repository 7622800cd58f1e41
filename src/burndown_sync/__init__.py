"""
Burndown Sync - keep a sprint burndown spreadsheet in step with Notion.

This package reads sprint/epic tasks from a Notion database, totals their
story points and writes the ideal and actual burndown lines into a
Google Sheets worksheet.
"""

__version__ = "0.1.0"
__author__ = "Burndown Sync Team"
__all__ = ["__version__"]
