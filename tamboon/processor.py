"""Reading donation records from rot128-encoded CSV files."""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Iterator

from .cipher import Rot128Reader
from .records import DonationRecord, _parse_int
from .settings import (
    COL_AMOUNT_SUBUNITS,
    COL_CC_NUMBER,
    COL_CVV,
    COL_EXP_MONTH,
    COL_EXP_YEAR,
    COL_NAME,
    DEFAULT_EXP_YEAR_INCREASE,
    DEFAULT_MAX_RECORDS,
)


def parse_row(
    line: str, exp_year_increase: int = DEFAULT_EXP_YEAR_INCREASE
) -> DonationRecord | None:
    """Parse one CSV line, or return ``None`` if it has fewer than six columns.

    The expiry year is moved forward by ``exp_year_increase``; a non-numeric year counts as 0.
    """
    row = [cell.strip() for cell in line.split(",")]
    if len(row) < 6:
        return None
    return DonationRecord(
        name=row[COL_NAME],
        amount_subunits=row[COL_AMOUNT_SUBUNITS],
        cc_number=row[COL_CC_NUMBER],
        cvv=row[COL_CVV],
        exp_month=row[COL_EXP_MONTH],
        exp_year=str(_parse_int(row[COL_EXP_YEAR]) + exp_year_increase),
    )


def _stream_records(
    handle: BinaryIO, max_records: int, exp_year_increase: int
) -> Iterator[DonationRecord]:
    with handle:
        count = 0
        for index, raw in enumerate(io.BufferedReader(Rot128Reader(handle))):
            if max_records > 0 and count >= max_records:
                break
            line = raw.removesuffix(b"\n").removesuffix(b"\r")
            if index == 0 or not line:
                continue
            record = parse_row(line.decode("utf-8", errors="replace"), exp_year_increase)
            if record is not None:
                count += 1
                yield record


def stream_and_decrypt_file(
    input_path: str | os.PathLike,
    max_records: int = DEFAULT_MAX_RECORDS,
    exp_year_increase: int = DEFAULT_EXP_YEAR_INCREASE,
) -> Iterator[DonationRecord]:
    """Yield the donation records of a rot128-encoded CSV file lazily.

    The header, empty lines and short lines are skipped; at most ``max_records``
    records are produced when it is positive. A missing file raises at once.
    """
    return _stream_records(open(input_path, "rb"), max_records, exp_year_increase)