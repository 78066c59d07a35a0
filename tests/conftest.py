from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

RULES = "\n".join(
    [
        "title,match,src,dst",
        "access,Component1 func:,Client,Web Server",
        "request,Component2 func:.* str=abc,Web Server,API Server",
        "notify,Component3 func:.* str=abc,API Server,Web Server",
    ]
)

LOG = "\n".join(
    [
        "Nov  2 12:34:56 : [12345678.012345] hogehoge function exec",
        "Nov  2 12:34:56 : [12345678.012345] Component1 func:1245 hogehoge val 1",
        "",
        "Nov  2 12:34:56 : [12345678.012345] Component2 func:1245 str=abc val 1",
        "Nov  2 12:34:56 : [12345678.012345] Component2 func:1245 str=def val 2",
        "Nov  2 12:34:56 : [12345678.012345] Component3 func:77 str=abc val 1",
    ]
)


@pytest.fixture
def rule_text() -> str:
    return RULES


@pytest.fixture
def log_text() -> str:
    return LOG


@pytest.fixture
def base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("LOG_SEQUENCE_BASE_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_SEQUENCE_LINE_ANNOTATIONS", "LOG_SEQUENCE_MAX_FILE_BYTES"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_inputs() -> Callable[[Path], tuple[Path, Path]]:
    def _write(directory: Path) -> tuple[Path, Path]:
        rules = directory / "rules.csv"
        log = directory / "app.log"
        rules.write_text(RULES + "\n", encoding="utf-8")
        log.write_text(LOG + "\n", encoding="utf-8")
        return rules, log

    return _write
