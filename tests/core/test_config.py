from __future__ import annotations

import pytest

from mcp_log_sequence_server.core.config import DiagramConfig, resolve_diagram_config


def test_resolve_defaults() -> None:
    cfg = resolve_diagram_config()
    assert cfg.include_line_annotations is True
    assert cfg.max_file_bytes == 10 * 1024 * 1024


@pytest.mark.parametrize(("raw", "expected"), [("0", False), ("off", False), ("YES", True), ("true", True)])
def test_resolve_line_annotations_env(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("LOG_SEQUENCE_LINE_ANNOTATIONS", raw)
    assert resolve_diagram_config().include_line_annotations is expected


def test_resolve_keeps_explicit_config_without_env() -> None:
    cfg = DiagramConfig(include_line_annotations=False, max_file_bytes=10)
    assert resolve_diagram_config(cfg) is cfg


def test_resolve_max_file_bytes_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_SEQUENCE_MAX_FILE_BYTES", "2048")
    assert resolve_diagram_config().max_file_bytes == 2048


@pytest.mark.parametrize(
    ("name", "raw"),
    [
        ("LOG_SEQUENCE_LINE_ANNOTATIONS", "maybe"),
        ("LOG_SEQUENCE_MAX_FILE_BYTES", "lots"),
        ("LOG_SEQUENCE_MAX_FILE_BYTES", "0"),
    ],
)
def test_resolve_rejects_invalid_env(monkeypatch: pytest.MonkeyPatch, name: str, raw: str) -> None:
    monkeypatch.setenv(name, raw)
    with pytest.raises(ValueError, match=name):
        resolve_diagram_config()
