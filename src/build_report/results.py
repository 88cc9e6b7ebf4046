"""Log individual worker results as the build progresses."""

from __future__ import annotations

import logging

from build_report.state import BuildResult

_LOGGER = logging.getLogger(__name__)


def log_build_result(result: BuildResult, logger: logging.Logger | None = None) -> None:
    """Log one worker result at a level matching its outcome.

    Parameters
    ----------
    result
        Result reported by a build worker.
    logger
        Destination logger; defaults to this module's logger.
    """
    target = logger or _LOGGER
    srpm = result.node.srpm_file_name()
    built_files = list(result.built_files)
    if result.error is not None:
        target.error(
            "Failed to build %s, error: %s, for details see: %s",
            srpm,
            result.error,
            result.log_file,
        )
        return
    if not result.node.is_build():
        target.debug("Processed node %s", result.node.friendly_name())
        return
    if result.skipped:
        target.warning(
            "Skipped build for '%s' per user request. RPMs expected to be present: %s",
            srpm,
            built_files,
        )
    elif result.used_cache:
        target.info("Prebuilt: %s -> %s", srpm, built_files)
    else:
        target.info("Built: %s -> %s", srpm, built_files)


__all__ = ["log_build_result"]
