from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import BinaryIO


DEFAULT_SUBDIRS = [
    "raw",
    "exports",
]


def _base_root() -> Path:
    env_root = os.getenv("WORKSPACES_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / "payroll_data"


def ensure_storage_root() -> Path:
    """Ensure the upload and export folders exist and return the root path."""

    root = _base_root()
    for sub in DEFAULT_SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)
    return root


def save_raw_file(filename: str, source: BinaryIO) -> Path:
    """Persist an uploaded file under the raw directory."""

    safe_name = Path(filename).name
    target = ensure_storage_root() / "raw" / safe_name
    with target.open("wb") as buffer:
        shutil.copyfileobj(source, buffer)
    return target


def export_path(filename: str) -> Path:
    return ensure_storage_root() / "exports" / Path(filename).name
