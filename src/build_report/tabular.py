"""Write the machine readable build summary CSV."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from build_report.classify import OUTCOME_ORDER, BuildClassification, Outcome
from serde_msgspec import StructBaseStrict

logger = logging.getLogger(__name__)

CSV_HEADER: tuple[str, str, str] = ("Package", "State", "Blocker")

_BLOCKED_OUTCOMES = frozenset({Outcome.FAILED, Outcome.UNBUILT})


class SummaryRow(StructBaseStrict, frozen=True):
    """One CSV row describing a build unit."""

    package: str
    state: Outcome
    blocker: str = ""

    def as_record(self) -> tuple[str, str, str]:
        return (self.package, self.state.value, self.blocker)


def summary_rows(
    classification: BuildClassification,
    blockers: Mapping[str, str],
) -> tuple[SummaryRow, ...]:
    """Return one row per build unit, grouped by outcome in report order.

    Rows inside a block are sorted by SRPM file name. Only Failed and
    Unbuilt rows carry a blocker annotation.

    Returns
    -------
    tuple[SummaryRow, ...]
        Ordered CSV rows, header excluded.
    """
    rows: list[SummaryRow] = []
    for outcome in OUTCOME_ORDER:
        for node in classification.members(outcome):
            blocker = blockers.get(node.srpm_path, "") if outcome in _BLOCKED_OUTCOMES else ""
            rows.append(SummaryRow(package=node.srpm_file_name(), state=outcome, blocker=blocker))
    return tuple(rows)


def write_summary_csv(rows: Iterable[SummaryRow], output_path: Path | str) -> bool:
    """Write summary rows to ``output_path`` with a ``Package,State,Blocker`` header.

    Failures to create or write the file are logged and reported through the
    return value so the remaining reporting keeps going.

    Parameters
    ----------
    rows
        Rows produced by :func:`summary_rows`.
    output_path
        Destination file.

    Returns
    -------
    bool
        ``True`` when the file was written completely.
    """
    path = Path(output_path)
    try:
        handle = path.open("w", encoding="utf-8", newline="")
    except OSError as exc:
        logger.warning("Unable to create '%s' file. Error: %s", path, exc)
        return False
    try:
        with handle:
            writer = csv.writer(handle, lineterminator="\n")
            writer.writerow(CSV_HEADER)
            writer.writerows(row.as_record() for row in rows)
    except OSError as exc:
        logger.warning("Failed to write to CSV file '%s'. Error: %s", path, exc)
        return False
    return True


__all__ = ["CSV_HEADER", "SummaryRow", "summary_rows", "write_summary_csv"]
