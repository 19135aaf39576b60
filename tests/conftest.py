from __future__ import annotations

import io
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import xlwt
from openpyxl import Workbook

sys.path.append(str(Path(__file__).resolve().parents[1]))


class FrozenClock:
    """Callable clock the service reads "now" from."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 5, 12, 9, 30, tzinfo=timezone.utc))


def workbook_bytes(rows: list[list], title: str = "Qarzdorlar") -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def xls_bytes(rows: list[list], title: str = "Qarzdorlar") -> bytes:
    """Same as :func:`workbook_bytes` but in the legacy BIFF (.xls) format."""
    workbook = xlwt.Workbook()
    sheet = workbook.add_sheet(title)
    for row_index, row in enumerate(rows):
        for col_index, value in enumerate(row):
            if value is not None:
                sheet.write(row_index, col_index, value)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


HEADER = ["№", "Qarzdor", "Telefon", "USD", "UZS"]


@pytest.fixture()
def two_debtor_sheet() -> bytes:
    return workbook_bytes(
        [
            HEADER,
            [1, "Karimov Anvar", "+998901112233", 150, 0],
            [2, "Rahimova Dilnoza", "+998907778899", None, 2_500_000],
            [3, "Jami", None, "izoh", "—"],
            [4, "Bo'sh", None, 0, 0],
        ]
    )


@pytest.fixture()
def empty_debt_sheet() -> bytes:
    return workbook_bytes(
        [
            HEADER,
            [1, "Yopilgan", None, 0, 0],
            [2, "Qaytargan", None, -50, None],
        ]
    )
