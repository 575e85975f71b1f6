"""File operation utilities for safe filename handling and JSON files."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional


def safe_filename(name: str, default: str = 'file', max_length: Optional[int] = None) -> str:
    """Create a safe filename from a user-provided name.

    Keeps alphanumeric characters, spaces, underscores and hyphens, and
    converts spaces to underscores.

    Args:
        name: The original filename or name to sanitize
        default: Default name to use if sanitization results in empty string
        max_length: Optional maximum length for the filename (truncates if provided)

    Returns:
        Sanitized filename safe for use in file systems

    Example:
        >>> safe_filename("alice smith!")
        'alice_smith'
        >>> safe_filename("", default="user")
        'user'
    """
    if not name:
        return default

    cleaned = ''.join(c for c in name if c.isalnum() or c in {' ', '_', '-'})
    cleaned = cleaned.strip().replace(' ', '_')

    while '__' in cleaned:
        cleaned = cleaned.replace('__', '_')

    if max_length is not None and len(cleaned) > max_length:
        cleaned = cleaned[:max_length]

    cleaned = cleaned.rstrip('_')

    return cleaned if cleaned else default


def ensure_directory(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Raises:
        OSError: If the directory cannot be created
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_json(target: Path, payload: Any) -> None:
    """Write ``payload`` as JSON, replacing ``target`` only once the write succeeded."""
    ensure_directory(target.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as handle:
            json.dump(payload, handle, indent=2)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
