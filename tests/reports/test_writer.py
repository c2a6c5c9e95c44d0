from __future__ import annotations

import io

import pandas as pd

from course_studentreports.core.enums import ExportFormat
from course_studentreports.reports.model import ReportData
from course_studentreports.reports.writer import render, write_csv

DATA = ReportData(
    headers=["First name/Last name", "Email address", "Course grade"],
    rows=[["Alice Smith", "alice@example.com", "88.50"], ["Bob Jones", "bob@example.com", "No Data"]],
    filename="studentreports.BIO101.1700000000",
)


def test_csv_has_bom_header_and_rows():
    payload = write_csv(DATA)

    assert payload.startswith(b"\xef\xbb\xbf")
    lines = payload.decode("utf-8-sig").splitlines()
    assert lines[0] == "First name/Last name,Email address,Course grade"
    assert lines[2] == "Bob Jones,bob@example.com,No Data"


def test_render_csv_names_the_download():
    payload, mimetype, name = render(DATA, ExportFormat.CSV)

    assert mimetype == "text/csv"
    assert name == "studentreports.BIO101.1700000000.csv"
    assert payload == write_csv(DATA)


def test_render_xlsx_round_trips_through_pandas():
    payload, mimetype, name = render(DATA, ExportFormat.XLSX)

    assert name.endswith(".xlsx")
    assert mimetype.startswith("application/vnd.openxmlformats")
    df = pd.read_excel(io.BytesIO(payload), engine="openpyxl", dtype=str)
    assert list(df.columns) == DATA.headers
    assert df.iloc[0]["Course grade"] == "88.50"
