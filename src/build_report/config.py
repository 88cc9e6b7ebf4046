"""Configuration for build summary reporting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from utils.env_utils import env_bool, env_path

ALLOW_TOOLCHAIN_REBUILDS_ENV = "ALLOW_TOOLCHAIN_REBUILDS"
BUILD_SUMMARY_FILE_ENV = "BUILD_SUMMARY_FILE"


@dataclass(frozen=True)
class BuildSummaryConfig:
    """Settings controlling how a build summary is reported.

    Attributes
    ----------
    allow_toolchain_rebuilds : bool
        Report toolchain conflicts at INFO instead of ERROR.
    csv_path : Path | None
        Destination of the CSV summary; ``None`` skips the CSV.
    """

    allow_toolchain_rebuilds: bool = False
    csv_path: Path | None = None

    @classmethod
    def from_env(cls) -> BuildSummaryConfig:
        """Build a configuration from environment variables.

        Returns
        -------
        BuildSummaryConfig
            Configuration resolved from ``ALLOW_TOOLCHAIN_REBUILDS`` and
            ``BUILD_SUMMARY_FILE``.
        """
        return cls(
            allow_toolchain_rebuilds=env_bool(
                ALLOW_TOOLCHAIN_REBUILDS_ENV,
                default=False,
                log_invalid=True,
            ),
            csv_path=env_path(BUILD_SUMMARY_FILE_ENV),
        )


__all__ = [
    "ALLOW_TOOLCHAIN_REBUILDS_ENV",
    "BUILD_SUMMARY_FILE_ENV",
    "BuildSummaryConfig",
]
