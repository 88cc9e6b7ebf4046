"""Render the human readable build summary."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from build_report.classify import OUTCOME_ORDER, BuildClassification, Outcome
from serde_msgspec import StructBaseStrict

SUMMARY_LOGGER_NAME = "build_report.summary"

BANNER: tuple[str, ...] = (
    "---------------------------",
    "--------- Summary ---------",
    "---------------------------",
)

_COUNT_LABELS: tuple[tuple[Outcome, str], ...] = (
    (Outcome.BUILT, "Number of built SRPMs:             %d"),
    (Outcome.PREBUILT, "Number of prebuilt SRPMs:          %d"),
    (Outcome.PREBUILT_DELTA, "Number of prebuilt delta SRPMs:    %d"),
    (Outcome.FAILED, "Number of failed SRPMs:            %d"),
    (Outcome.UNBUILT, "Number of blocked SRPMs:           %d"),
)
_UNRESOLVED_COUNT_LABEL = "Number of unresolved dependencies: %d"

_CATEGORY_HEADERS: dict[Outcome, str] = {
    Outcome.BUILT: "Built SRPMs:",
    Outcome.PREBUILT: "Prebuilt SRPMs:",
    Outcome.PREBUILT_DELTA: (
        "Skipped SRPMs (i.e., delta mode is on, packages are already available in a repo):"
    ),
    Outcome.FAILED: "Failed SRPMs:",
    Outcome.UNBUILT: "Blocked SRPMs:",
}
_UNRESOLVED_HEADER = "Unresolved dependencies:"
_CONFLICTS_IGNORED = "Toolchain RPMs conflicts are ignored since ALLOW_TOOLCHAIN_REBUILDS=y"


class SummaryLine(StructBaseStrict, frozen=True):
    """One rendered summary line and the log level it is emitted at."""

    level: int
    text: str


def _info(text: str) -> SummaryLine:
    return SummaryLine(level=logging.INFO, text=text)


def _item(text: str, *, level: int = logging.INFO) -> SummaryLine:
    return SummaryLine(level=level, text=f"--> {text}")


def _conflict_lines(
    rpm_conflicts: Sequence[str],
    srpm_conflicts: Sequence[str],
    *,
    allow_toolchain_rebuilds: bool,
) -> list[SummaryLine]:
    if not rpm_conflicts and not srpm_conflicts:
        return []
    level = logging.INFO if allow_toolchain_rebuilds else logging.ERROR
    lines: list[SummaryLine] = []
    if allow_toolchain_rebuilds:
        lines.append(_info(_CONFLICTS_IGNORED))
    lines.extend(
        (
            SummaryLine(
                level=level,
                text=f"Number of toolchain RPM conflicts: {len(rpm_conflicts)}",
            ),
            SummaryLine(
                level=level,
                text=f"Number of toolchain SRPM conflicts: {len(srpm_conflicts)}",
            ),
        )
    )
    for header, conflicts in (
        ("RPM conflicts with toolchain: ", rpm_conflicts),
        ("SRPM conflicts with toolchain: ", srpm_conflicts),
    ):
        if not conflicts:
            continue
        lines.append(SummaryLine(level=level, text=header))
        lines.extend(_item(conflict, level=level) for conflict in conflicts)
    return lines


def _category_lines(classification: BuildClassification, outcome: Outcome) -> list[SummaryLine]:
    members = classification.members(outcome)
    if not members:
        return []
    lines = [_info(_CATEGORY_HEADERS[outcome])]
    for node in members:
        if outcome is Outcome.FAILED:
            failure = classification.failures[node.srpm_path]
            lines.append(
                _item(
                    f"{node.srpm_file_name()} , error: {failure.error}, "
                    f"for details see: {failure.log_file}"
                )
            )
        else:
            lines.append(_item(node.srpm_file_name()))
    return lines


def build_summary_lines(
    classification: BuildClassification,
    *,
    rpm_conflicts: Sequence[str] = (),
    srpm_conflicts: Sequence[str] = (),
    allow_toolchain_rebuilds: bool = False,
) -> tuple[SummaryLine, ...]:
    """Render the console summary for a classification.

    Members of each category are listed sorted by SRPM file name and
    unresolved dependencies sorted by display string, so two renders of an
    unchanged snapshot are identical. Toolchain conflicts keep the order they
    were supplied in. ``allow_toolchain_rebuilds`` only lowers the level of
    the conflict lines; it never changes their text or number.

    Parameters
    ----------
    classification
        Outcome partition to render.
    rpm_conflicts
        RPM names that collide with the bootstrap toolchain.
    srpm_conflicts
        SRPM names that collide with the bootstrap toolchain.
    allow_toolchain_rebuilds
        Whether toolchain rebuilds were explicitly allowed.

    Returns
    -------
    tuple[SummaryLine, ...]
        Ordered summary lines.
    """
    lines: list[SummaryLine] = [_info(text) for text in BANNER]
    counts = classification.counts()
    lines.extend(_info(label % counts[outcome]) for outcome, label in _COUNT_LABELS)
    lines.append(_info(_UNRESOLVED_COUNT_LABEL % len(classification.unresolved)))
    lines.extend(
        _conflict_lines(
            rpm_conflicts,
            srpm_conflicts,
            allow_toolchain_rebuilds=allow_toolchain_rebuilds,
        )
    )
    for outcome in OUTCOME_ORDER:
        lines.extend(_category_lines(classification, outcome))
    if classification.unresolved:
        lines.append(_info(_UNRESOLVED_HEADER))
        lines.extend(_item(dependency) for dependency in classification.unresolved)
    return tuple(lines)


def log_build_summary(
    lines: Iterable[SummaryLine],
    logger: logging.Logger | None = None,
) -> None:
    """Emit summary lines through a logger at their own levels."""
    target = logger or logging.getLogger(SUMMARY_LOGGER_NAME)
    for line in lines:
        target.log(line.level, "%s", line.text)


__all__ = [
    "BANNER",
    "SUMMARY_LOGGER_NAME",
    "SummaryLine",
    "build_summary_lines",
    "log_build_summary",
]
