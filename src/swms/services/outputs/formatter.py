"""Utilities to serialize tabular exports into CSV/XLSX artifacts."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from openpyxl import Workbook


def rows_to_csv(header: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def rows_to_xlsx(header: Sequence[str], rows: Sequence[Sequence[object]], *, title: str = "export") -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = title[:31]
    worksheet.append(list(header))
    for row in rows:
        worksheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
