# app/services/exporter.py

from typing import Iterable, Sequence
import csv
import io

from app.domain.models import TestCase, TestCaseStatus

EXPORT_COLUMNS = ["id", "title", "steps", "url", "status", "notes"]
EXPORT_FILENAME = "approved-test-cases.csv"

def export_approved_csv(test_cases: Iterable[TestCase]) -> str:
    """
    Serialize approved test cases to CSV.

    Every field is quoted and steps share one cell, one step per line written
    as ``n. "step"``. The upload parser strips exactly that wrapper, so the
    output can be uploaded again with its steps unchanged.

    Args:
        test_cases: Reviewed test cases; anything not approved is left out

    Returns:
        str: CSV document with a header row
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)

    for test_case in test_cases:
        if test_case.status != TestCaseStatus.APPROVED:
            continue
        writer.writerow([
            test_case.id,
            test_case.title,
            format_steps(test_case.steps),
            test_case.url,
            test_case.status.value,
            test_case.notes
        ])

    return buffer.getvalue()

def format_steps(steps: Sequence[str]) -> str:
    return "\n".join(f'{number}. "{step}"' for number, step in enumerate(steps, start=1))
