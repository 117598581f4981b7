"""Formatting of donation totals for the end-of-run report."""

from __future__ import annotations

import sys
from typing import TextIO

from .records import DonationStats

_DONOR_INDENT = " " * 24


def format_thb(subunits: int) -> str:
    """Format an amount in satang as baht with two decimals and thousands separators."""
    text = f"{subunits / 100.0:.2f}"
    dot = len(text) - 3
    head = []
    for index, char in enumerate(text[:dot]):
        if index and (dot - index) % 3 == 0:
            head.append(",")
        head.append(char)
    return "".join(head) + text[dot:]


def format_summary(stats: DonationStats) -> str:
    """Render the report for ``stats``."""
    lines = [
        "done.",
        "",
        f"        total received: THB {format_thb(stats.total_amount):>10}",
        f"  successfully donated: THB {format_thb(stats.success_amount):>10}",
        f"       faulty donation: THB {format_thb(stats.faulty_amount()):>10}",
        "",
        f"    average per person: THB {format_thb(stats.average_per_person()):>10}",
    ]
    text = "\n".join(lines) + "\n" + "            top donors:"
    donors = stats.top_donors(3)
    if not donors:
        return text + "\n"
    first, *rest = donors
    text += f" {first[0]}\n"
    text += "".join(f"{_DONOR_INDENT}{name}\n" for name, _ in rest)
    return text


def print_summary(stats: DonationStats, file: TextIO | None = None) -> None:
    """Write the report for ``stats`` to ``file`` (standard output by default)."""
    (file if file is not None else sys.stdout).write(format_summary(stats))