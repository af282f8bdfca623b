from __future__ import annotations
from typing import List, Dict, Any, Sequence, Tuple
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from app.schemas.section import Section
from app.utils.timeslots import format_hhmm

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri"]
HEADERS = ["Schedule", "Course", "Section", "Instructor", "Location", *WEEKDAY_NAMES]

# every other schedule is shaded so neighbouring schedules stay apart
ALT_FILL = PatternFill(start_color="FFEEF3FA", end_color="FFEEF3FA", fill_type="solid")
MAX_COLUMN_WIDTH = 60


def schedule_rows(schedules: Sequence[Tuple[str, List[Section]]]) -> List[Dict[str, Any]]:
    """
    One row per meeting block:
    schedule #, course, section, instructor, location, Mon..Fri "HH:MM-HH:MM"
    """
    rows = []
    for n, (_key, sections) in enumerate(schedules, start=1):
        for s in sections:
            for b in s.blocks:
                row = {
                    "Schedule": n,
                    "Course": f"{s.code} {s.name}",
                    "Section": b.section_id,
                    "Instructor": b.instructor,
                    "Location": b.location,
                }
                for day, slot in zip(WEEKDAY_NAMES, b.days):
                    row[day] = (
                        f"{format_hhmm(slot.start_time)}-{format_hhmm(slot.end_time)}"
                        if slot.effective else ""
                    )
                rows.append(row)
    return rows


def _autosize(ws: Worksheet) -> None:
    for column in ws.iter_cols(min_row=1, max_row=ws.max_row):
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(column[0].column)].width = min(longest + 2, MAX_COLUMN_WIDTH)


def rows_to_xlsx_bytes(rows: List[Dict[str, Any]], sheet_name: str = "Schedules") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    ws.append(HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.freeze_panes = "A2"

    if not rows:
        ws.append(["No schedules generated"])

    for r in rows:
        ws.append([r.get(h, "") for h in HEADERS])
        if r.get("Schedule", 1) % 2 == 0:
            for cell in ws[ws.max_row]:
                cell.fill = ALT_FILL

    _autosize(ws)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "schedules") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
