"""Rule/log file loading for the tool and CLI layers.

Paths are resolved under ``LOG_SEQUENCE_BASE_DIR`` (default: cwd). Plain text
and ``.gz`` files are supported.
"""

from __future__ import annotations

import gzip
import os
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .config import BASE_DIR_ENV

ALLOWED_FILE_SUFFIXES = {".csv", ".log", ".txt", ".md"}
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"


def base_dir() -> Path:
    """Return the resolved base directory for file access."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def safe_resolve(path: str | Path) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _allowed_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".gz":
        suffix = path.with_suffix("").suffix.lower()
    return suffix


def resolve_input_path(
    path: str | Path,
    *,
    max_bytes: int | None = None,
    confine: bool = True,
) -> Path:
    """Resolve and validate a rule/log file path.

    With ``confine=False`` (CLI use) the base directory check is skipped.
    """
    resolved = safe_resolve(path) if confine else Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    if _allowed_suffix(resolved) not in ALLOWED_FILE_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed} (optionally .gz).")
    if max_bytes is not None and resolved.stat().st_size > max_bytes:
        raise ValueError(f"File too large: {resolved} exceeds {max_bytes} bytes")
    return resolved


@asynccontextmanager
async def _open_text(path: Path):
    """Open a file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as f:
            yield f


async def read_text(
    path: str | Path,
    *,
    max_bytes: int | None = None,
    confine: bool = True,
) -> str:
    """Read a rule or log file as text."""
    resolved = resolve_input_path(path, max_bytes=max_bytes, confine=confine)
    async with _open_text(resolved) as f:
        text = await f.read()
    if max_bytes is not None and len(text.encode(TEXT_ENCODING, errors=TEXT_ERRORS)) > max_bytes:
        # .gz: decoded size is not bounded by st_size
        raise ValueError(f"File too large: {resolved} exceeds {max_bytes} bytes once decoded")
    return text


async def read_inputs(
    rules_path: str | Path,
    log_path: str | Path,
    *,
    max_bytes: int | None = None,
    confine: bool = True,
) -> tuple[str, str]:
    """Read the rule table and log text."""
    rule_text = await read_text(rules_path, max_bytes=max_bytes, confine=confine)
    log_text = await read_text(log_path, max_bytes=max_bytes, confine=confine)
    return rule_text, log_text
