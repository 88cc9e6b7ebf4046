"""Pytest diagnostics and crash context helpers."""

from __future__ import annotations

import contextlib
import faulthandler
import json
import os
import platform
import signal
import sys
from importlib import metadata
from pathlib import Path
from typing import Any

import pytest

from build_report.config import ALLOW_TOOLCHAIN_REBUILDS_ENV, BUILD_SUMMARY_FILE_ENV

_DIAG_DIR = Path("build/test-results")
_ENV_PATH = _DIAG_DIR / "diagnostics_env.json"
_VERSIONS_PATH = _DIAG_DIR / "diagnostics_versions.json"
_TRACE_PATH = _DIAG_DIR / "diagnostics_tracebacks.log"

_STATE: dict[str, Any] = {"faulthandler_file": None}


def _env_subset(prefixes: tuple[str, ...]) -> dict[str, str]:
    return {key: value for key, value in os.environ.items() if key.startswith(prefixes)}


def _collect_env() -> dict[str, Any]:
    return {
        "python": sys.version,
        "executable": sys.executable,
        "platform": platform.platform(),
        "env": _env_subset(("PYTHON", "OTEL_", "ALLOW_TOOLCHAIN", "BUILD_SUMMARY")),
        "sys_path": list(sys.path),
    }


def _collect_versions() -> dict[str, str]:
    versions: dict[str, str] = {}
    for name in ("msgspec", "rustworkx", "opentelemetry-api", "opentelemetry-sdk", "pytest"):
        try:
            versions[name] = metadata.version(name)
        except metadata.PackageNotFoundError:
            continue
    return versions


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    try:
        path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    except OSError:
        return


def pytest_sessionstart(session: object) -> None:
    """Initialize diagnostic capture for the pytest session."""
    with contextlib.suppress(OSError):
        _DIAG_DIR.mkdir(parents=True, exist_ok=True)
    _write_json(_ENV_PATH, _collect_env())
    _write_json(_VERSIONS_PATH, _collect_versions())
    _setup_faulthandler()
    _ = session


def pytest_sessionfinish(session: object, exitstatus: int) -> None:
    """Release diagnostics resources at pytest session completion."""
    _teardown_faulthandler()
    _ = (session, exitstatus)


def _setup_faulthandler() -> None:
    if _STATE["faulthandler_file"] is not None:
        return
    try:
        _STATE["faulthandler_file"] = _TRACE_PATH.open("a", encoding="utf-8")
    except OSError:
        return
    faulthandler.enable(_STATE["faulthandler_file"], all_threads=True)
    sigabrt = getattr(signal, "SIGABRT", None)
    if sigabrt is None:
        return
    try:
        faulthandler.register(sigabrt, file=_STATE["faulthandler_file"], all_threads=True)
    except RuntimeError:
        return


def _teardown_faulthandler() -> None:
    stream = _STATE.get("faulthandler_file")
    if stream is None:
        return
    with contextlib.suppress(RuntimeError):
        faulthandler.disable()
    sigabrt = getattr(signal, "SIGABRT", None)
    if sigabrt is not None:
        with contextlib.suppress(RuntimeError):
            faulthandler.unregister(sigabrt)
    with contextlib.suppress(OSError):
        stream.close()
    _STATE["faulthandler_file"] = None


@pytest.fixture(autouse=True)
def _isolated_summary_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep build summary switches from the caller's shell out of tests."""
    monkeypatch.delenv(ALLOW_TOOLCHAIN_REBUILDS_ENV, raising=False)
    monkeypatch.delenv(BUILD_SUMMARY_FILE_ENV, raising=False)
