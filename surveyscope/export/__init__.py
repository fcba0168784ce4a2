"""Export renderings of an analysis: CSV sheets and the HTML report."""

from surveyscope.export.csv_export import escape_field, to_delimited_text, to_detail_text
from surveyscope.export.html_report import to_document
from surveyscope.export.paths import ExportPaths, write_export

__all__ = [
    "ExportPaths",
    "escape_field",
    "to_delimited_text",
    "to_detail_text",
    "to_document",
    "write_export",
]
