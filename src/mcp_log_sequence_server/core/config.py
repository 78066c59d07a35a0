"""Runtime configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

LINE_ANNOTATIONS_ENV = "LOG_SEQUENCE_LINE_ANNOTATIONS"
BASE_DIR_ENV = "LOG_SEQUENCE_BASE_DIR"
MAX_FILE_BYTES_ENV = "LOG_SEQUENCE_MAX_FILE_BYTES"
LOG_LEVEL_ENV = "LOG_SEQUENCE_LOG_LEVEL"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class DiagramConfig:
    include_line_annotations: bool = True
    max_file_bytes: int = 10 * 1024 * 1024


def _env_bool(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be one of: {', '.join(sorted(_TRUE | _FALSE))}")


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


def resolve_diagram_config(cfg: DiagramConfig | None = None) -> DiagramConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = DiagramConfig()

    annotate = _env_bool(LINE_ANNOTATIONS_ENV)
    if annotate is not None and annotate != cfg.include_line_annotations:
        cfg = replace(cfg, include_line_annotations=annotate)

    max_bytes = _env_int(MAX_FILE_BYTES_ENV)
    if max_bytes is not None and max_bytes != cfg.max_file_bytes:
        cfg = replace(cfg, max_file_bytes=max_bytes)

    return cfg
