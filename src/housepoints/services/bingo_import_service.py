"""Import bingo answers from a survey CSV export."""

from __future__ import annotations

import csv
import io
import logging
import re
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.orm import Session

from .bingo_service import QUESTIONS
from .roster_service import find_student_by_email, normalize_bingo

logger = logging.getLogger(__name__)

_EMAIL_HEADER = re.compile("email", re.IGNORECASE)


class BingoImportError(Exception):
    """Raised when the CSV lacks the expected columns."""


@dataclass
class ImportSummary:
    matched: int = 0
    unmatched_emails: List[str] = field(default_factory=list)


def import_bingo_csv(session: Session, csv_text: str) -> ImportSummary:
    """Attach bingo answers from ``csv_text`` to students matched by email.

    Each ``Q1``..``Q4`` cell holds comma-separated answers. Rows without an
    email are skipped; rows whose email matches no student are reported.
    """

    rows = list(csv.reader(io.StringIO(csv_text)))
    if not rows:
        raise BingoImportError("No data found in CSV.")

    headers = [header.strip() for header in rows[0]]
    email_idx = next((i for i, header in enumerate(headers) if _EMAIL_HEADER.search(header)), None)
    if email_idx is None:
        raise BingoImportError("No email column found in CSV.")

    question_idx = {}
    for question in QUESTIONS:
        if question not in headers:
            raise BingoImportError(f"Column {question} not found in CSV.")
        question_idx[question] = headers.index(question)

    summary = ImportSummary()
    for cols in rows[1:]:
        if not any(cell.strip() for cell in cols):
            continue
        email = cols[email_idx].strip().lower() if email_idx < len(cols) else ""
        if not email:
            continue

        student = find_student_by_email(session, email)
        if student is None:
            summary.unmatched_emails.append(email)
            continue

        answers = {
            question: (cols[idx] if idx < len(cols) else "").split(",")
            for question, idx in question_idx.items()
        }
        student.bingo = normalize_bingo(answers)
        summary.matched += 1

    session.flush()
    logger.info("bingo import: %d matched, %d unmatched", summary.matched, len(summary.unmatched_emails))
    return summary
