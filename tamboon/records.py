"""Donation records and running statistics."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str) -> int:
    """Parse a signed 64-bit decimal integer, or return 0 if ``text`` is not one."""
    if not _INT_PATTERN.fullmatch(text):
        return 0
    value = int(text)
    return value if -(2**63) <= value < 2**63 else 0


@dataclass(frozen=True)
class DonationRecord:
    """One donation as read from the input file."""

    name: str
    amount_subunits: str
    cc_number: str
    cvv: str
    exp_month: str
    exp_year: str

    @property
    def amount(self) -> int:
        """The amount in subunits, or 0 if it is not a number."""
        return _parse_int(self.amount_subunits)


@dataclass
class DonationStats:
    """Thread-safe totals gathered while processing donations."""

    total_count: int = 0
    total_amount: int = 0
    success_count: int = 0
    success_amount: int = 0
    donor_amounts: dict[str, int] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record_received(self, amount: int) -> None:
        with self._lock:
            self.total_count += 1
            self.total_amount += amount

    def record_success(self, name: str, amount: int) -> None:
        with self._lock:
            self.success_count += 1
            self.success_amount += amount
            self.donor_amounts[name] = self.donor_amounts.get(name, 0) + amount

    def faulty_amount(self) -> int:
        return self.total_amount - self.success_amount

    def average_per_person(self) -> int:
        """Total amount per donation, truncated toward zero."""
        if not self.total_count:
            return 0
        quotient = abs(self.total_amount) // self.total_count
        return quotient if self.total_amount >= 0 else -quotient

    def top_donors(self, limit: int = 3) -> list[tuple[str, int]]:
        """The successful donors with the largest totals, largest first."""
        with self._lock:
            items = list(self.donor_amounts.items())
        return sorted(items, key=lambda item: item[1], reverse=True)[:limit]