"""Client that turns donation records into tokens and charges concurrently."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, TextIO

from .ratelimit import RateLimiter
from .records import DonationRecord, DonationStats
from .services import ChargeService, TokenService
from .settings import DEFAULT_MAX_DONATION_WORKERS, ClientConfig
from .summary import print_summary

logger = logging.getLogger(__name__)


class DonationError(Exception):
    """Raised when a single donation cannot be completed."""


class OmiseClient:
    """Processes donations with a bounded number of concurrent workers."""

    def __init__(
        self,
        token_service: TokenService,
        charge_service: ChargeService,
        rate_limiter: RateLimiter | None = None,
        max_workers: int = DEFAULT_MAX_DONATION_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.token_service = token_service
        self.charge_service = charge_service
        self.rate_limiter = rate_limiter or RateLimiter()
        self.max_workers = max_workers

    @classmethod
    def from_env(cls) -> "OmiseClient":
        return cls(
            TokenService.from_env(),
            ChargeService.from_env(),
            RateLimiter(),
            ClientConfig.from_env().max_donation_workers,
        )

    def create_token(
        self, name: str, cc_number: str, cvv: str, exp_month: str, exp_year: str
    ) -> str:
        return self.token_service.create_token(name, cc_number, cvv, exp_month, exp_year)

    def create_charge(self, amount, token_id: str, description: str) -> None:
        self.charge_service.create_charge(amount, token_id, description)

    def process_donations_stream(
        self, records: Iterable[DonationRecord], out: TextIO | None = None
    ) -> DonationStats:
        """Charge every record, print the summary to ``out`` and return the totals."""
        stats = DonationStats()
        slots = threading.BoundedSemaphore(self.max_workers)
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            for record in records:
                stats.record_received(record.amount)
                slots.acquire()
                future = pool.submit(self._donate, record, stats)
                future.add_done_callback(lambda _future: slots.release())
        print_summary(stats, out)
        return stats

    def _donate(self, record: DonationRecord, stats: DonationStats) -> None:
        try:
            self.rate_limiter.wait_if_paused()
            try:
                token_id = self.token_service.create_token_with_rate_limit(
                    record.name, record.cc_number, record.cvv,
                    record.exp_month, record.exp_year, self.rate_limiter,
                )
            except Exception as exc:
                raise DonationError(f"creating token: {exc}") from exc
            self.rate_limiter.wait_if_paused()
            try:
                self.charge_service.create_charge_with_rate_limit(
                    record.amount_subunits, token_id,
                    f"charge for {record.name}", self.rate_limiter,
                )
            except Exception as exc:
                raise DonationError(f"creating charge: {exc}") from exc
        except DonationError as exc:
            logger.error("Error processing donation for %s: %s", record.name, exc)
        else:
            stats.record_success(record.name, record.amount)