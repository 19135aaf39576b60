#!/usr/bin/env python
from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path

from openpyxl import Workbook


HEADER = ["№", "Qarzdor", "Telefon", "USD", "UZS"]

SAMPLE_ROWS = [
    ["Karimov Anvar", "+998901112233", 150, 0],
    ["Rahimova Dilnoza", "+998907778899", 0, 2_500_000],
    ["Toshmatov Bekzod", "+998935554466", 320.5, 1_200_000],
    [None, "+998971230000", 75, None],
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Agent qarzdorlik Excel namunasini yaratish")
    parser.add_argument("--agent", default="Aliyev", help="Agent nomi (fayl nomi shundan olinadi)")
    parser.add_argument("--output-dir", default=".", help="Natija papkasi")
    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output = output_dir / f"{args.agent} {date.today():%d.%m.%Y}.xlsx"

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Qarzdorlar"
    sheet.append(HEADER)
    for index, row in enumerate(SAMPLE_ROWS, start=1):
        sheet.append([index, *row])
    workbook.save(output)

    print(f"Namuna fayl yaratildi: {output}")


if __name__ == "__main__":
    main()
