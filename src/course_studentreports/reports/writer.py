"""Turn ReportData into downloadable files."""
from __future__ import annotations

import csv
import io

import pandas as pd

from ..core.enums import ExportFormat
from .model import ReportData

MIMETYPES = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def write_csv(data: ReportData) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(data.headers)
    writer.writerows(data.rows)
    return out.getvalue().encode("utf-8-sig")


def write_xlsx(data: ReportData, *, sheet_name: str = "Student reports") -> bytes:
    df = pd.DataFrame(data.rows, columns=data.headers)

    # Write the workbook in memory (never to disk)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


def render(data: ReportData, fmt: ExportFormat) -> tuple[bytes, str, str]:
    """(payload, mimetype, download name) for the requested format."""
    if fmt == ExportFormat.XLSX:
        payload = write_xlsx(data)
    else:
        payload = write_csv(data)
    return payload, MIMETYPES[fmt], f"{data.filename}.{fmt.value}"
