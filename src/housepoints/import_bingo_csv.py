"""
Command-line importer for bingo survey answers.

Reads a CSV export with an email column and Q1..Q4 columns and stores each
row's answers on the student with that email. Exits with status 1 when any
email could not be matched so students can be asked to sign up first.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .core.database import SessionLocal, init_db
from .services.bingo_import_service import BingoImportError, import_bingo_csv

logger = logging.getLogger(__name__)

DEFAULT_CSV = "data/responses.csv"


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Attach bingo answers from a CSV file to students.")
    parser.add_argument(
        "csv_path",
        nargs="?",
        default=DEFAULT_CSV,
        help=f"Path to CSV file (default: {DEFAULT_CSV})",
    )
    args = parser.parse_args(argv)

    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        print(f"CSV file not found: {csv_path}", file=sys.stderr)
        return 1

    init_db()
    session = SessionLocal()
    try:
        summary = import_bingo_csv(session, csv_path.read_text(encoding="utf-8"))
        session.commit()
    except BingoImportError as exc:
        session.rollback()
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        session.close()

    print(f"{summary.matched} students linked.")
    if summary.unmatched_emails:
        print("\nEmails not found:")
        for email in summary.unmatched_emails:
            print(f"- {email}")
        print("\nMake sure every student has created an account first.")
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
