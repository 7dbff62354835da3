"""Logging setup and debug dumps of fetched content."""

import io
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

_LOG = logging.getLogger("mediaextract")
_handler: Optional[logging.Handler] = None
_allow_log_file = False

_LEVELS = {
    "": logging.INFO,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "dpanic": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}


def setup_logging() -> logging.Logger:
    """Attach a single stdout handler to the package logger, at info level."""
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(
            logging.Formatter(
                "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        _LOG.addHandler(_handler)
        _LOG.setLevel(logging.INFO)
    return _LOG


def set_level(level: str) -> None:
    """Set the package log level by name; unknown names raise ValueError."""
    try:
        _LOG.setLevel(_LEVELS[level.lower()])
    except KeyError:
        raise ValueError(f"failed to parse log level {level}") from None


def set_log_file(value: bool) -> None:
    """Turn debug dumps written by write_file on or off."""
    global _allow_log_file
    _allow_log_file = bool(value)


def _strip_ext(name: str) -> str:
    base = os.path.basename(name)
    dot = base.rfind(".")
    if dot < 0:
        return name
    return name[: len(name) - (len(base) - dot)]


def _raw_content(content: Any) -> "tuple[bytes, bool]":
    if isinstance(content, (bytes, bytearray)):
        return bytes(content), False
    if isinstance(content, str):
        return content.encode(), False
    body = getattr(content, "content", None)
    if isinstance(body, (bytes, bytearray)):
        return bytes(body), False
    if isinstance(content, io.IOBase) and content.readable() and content.seekable():
        position = content.tell()
        data = content.read()
        content.seek(position)
        return (data.encode() if isinstance(data, str) else bytes(data)), False
    try:
        return json.dumps(content, ensure_ascii=False).encode(), True
    except (TypeError, ValueError):
        return str(content).encode(), False


def write_file(name: str, content: Any) -> Optional[Path]:
    """Dump ``content`` next to ``name`` as .json or .txt when dumps are on.

    Returns the written path, or None when nothing was written.
    """
    if not _allow_log_file:
        return None

    raw, is_json = _raw_content(content)
    parsed: Any = None
    if raw[:1] in (b"{", b"["):
        try:
            parsed = json.loads(raw)
            is_json = True
        except ValueError:
            pass
    elif is_json:
        parsed = json.loads(raw)

    if is_json:
        if parsed is None:
            try:
                parsed = json.loads(raw)
            except ValueError:
                parsed = None
        if parsed is not None:
            raw = json.dumps(parsed, indent=2, ensure_ascii=False).encode()
        path = Path(_strip_ext(name) + ".json")
    else:
        path = Path(_strip_ext(name) + ".txt")

    try:
        path.write_bytes(raw)
    except OSError as exc:
        _LOG.error("failed to write file %s: %s", path, exc)
        return None
    _LOG.info("saved file %s", path)
    return path