"""Command line entry point: read a donation file and charge every donation."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .omise_client import OmiseClient
from .processor import stream_and_decrypt_file
from .settings import ProcessorConfig

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the donation workflow and return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)

    if Path(".env").is_file():
        load_dotenv(".env")
    else:
        logger.warning("Warning: .env file not found, using system environment variables")

    config = ProcessorConfig.from_env()
    if not args:
        print("Usage: tamboon <inputfile.rot128>")
        return 0

    print("performing donations...")
    try:
        records = stream_and_decrypt_file(args[0], config.max_records, config.exp_year_increase)
    except OSError as exc:
        logger.error("%s", exc)
        return 1

    OmiseClient.from_env().process_donations_stream(records)
    return 0


if __name__ == "__main__":
    sys.exit(main())