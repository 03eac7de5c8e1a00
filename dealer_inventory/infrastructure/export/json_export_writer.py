"""Local filesystem writer for JSON exports, with path validation and atomic writes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from dealer_inventory.infrastructure.exceptions import ExportPathError, ExportWriteError


class JsonExportWriter:
    """Writes JSON documents under export_dir (temp file + rename).

    File names are validated against export_dir so a crafted name cannot
    escape it.
    """

    def __init__(self, export_dir: str) -> None:
        self.export_dir = Path(export_dir).resolve()

    def _get_full_path(self, file_name: str) -> Path:
        """Resolve and validate path under export_dir. Raises ExportPathError on traversal."""
        full_path = (self.export_dir / file_name).resolve()
        try:
            full_path.relative_to(self.export_dir)
        except ValueError as e:
            raise ExportPathError(file_name) from e
        return full_path

    async def write(self, file_name: str, payload: dict[str, Any]) -> str:
        """Write payload as pretty JSON; return the absolute file path."""
        target_path = self._get_full_path(file_name)
        await aiofiles.os.makedirs(target_path.parent, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            dir=target_path.parent, prefix=".tmp_", suffix=target_path.suffix
        )
        os.close(temp_fd)
        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(payload, indent=2, default=str))
            os.replace(temp_path, target_path)
        except OSError as e:
            if os.path.exists(temp_path):
                await aiofiles.os.remove(temp_path)
            raise ExportWriteError(file_name, str(e)) from e
        return str(target_path)
