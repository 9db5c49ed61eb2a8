"""Revenue figures and history exports."""
import csv
from datetime import datetime, timezone
from pathlib import Path

from openpyxl import load_workbook

from checkmaster.core.models import Submission
from checkmaster.reporting.history import format_currency, submissions_to_rows, summarize_history
from checkmaster.reporting.sinks import write_csv, write_excel


def _ms(year: int, month: int, day: int) -> int:
    return int(datetime(year, month, day, 12, tzinfo=timezone.utc).timestamp() * 1000)


def _history():
    return [
        Submission(id="a", template_id="t", template_name="Vistoria", data={"owner": "Ana", "extras": ["relay"]}, total_value=100, date=_ms(2025, 9, 3)),
        Submission(id="b", template_id="t", template_name="Vistoria", data={"owner": "Bia", "washed": True}, total_value=50.5, date=_ms(2026, 10, 1)),
        Submission(id="c", template_id="t", template_name="Rápido", data={"thumbnail": "data:,"}, total_value=20, date=_ms(2026, 10, 2), thumbnail="data:,"),
        Submission(id="d", template_id="t", template_name="Rápido", data={}, total_value=0, date=_ms(2026, 10, 15)),
    ]


def test_summarize_history_counts_current_month_only():
    summary = summarize_history(_history(), now=datetime(2026, 10, 19, tzinfo=timezone.utc))
    assert summary.total_revenue == 170.5
    assert summary.month_count == 3
    assert [item.id for item in summary.recent] == ["d", "c", "b"]


def test_summarize_empty_history():
    summary = summarize_history([])
    assert summary.total_revenue == 0
    assert summary.month_count == 0
    assert summary.recent == []


def test_format_currency_uses_brazilian_separators():
    assert format_currency(1234.5) == "R$ 1.234,50"
    assert format_currency(0) == "R$ 0,00"
    assert format_currency(-10) == "-R$ 10,00"


def test_rows_flatten_answers_without_thumbnail():
    rows = submissions_to_rows(_history())
    assert list(rows[0].keys()) == ["Id", "Template", "Date", "Total", "Thumbnail", "owner", "extras", "washed"]
    assert rows[0]["extras"] == "relay"
    assert rows[1]["washed"] == "yes"
    assert rows[1]["Total"] == "50.50"
    assert rows[2]["Thumbnail"] == "yes"
    assert rows[3]["owner"] == ""


def test_write_csv_and_excel(tmp_path: Path):
    rows = submissions_to_rows(_history())

    csv_path = tmp_path / "out" / "history.csv"
    write_csv(rows, csv_path)
    with csv_path.open(encoding="utf-8") as handle:
        assert len(list(csv.DictReader(handle))) == 4

    excel_path = tmp_path / "history.xlsx"
    write_excel(rows, excel_path)
    sheet = load_workbook(excel_path).active
    assert sheet.title == "submissions"
    assert sheet.max_row - 1 == 4
