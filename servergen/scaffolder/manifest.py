"""``package.json`` load-modify-store helpers."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from servergen.utils import load_json, save_json

from .commands import ScaffoldError

#: Fields every generated backend manifest ends up with.
BACKEND_ENTRY_POINT = "src/app.js"
BACKEND_MODULE_TYPE = "module"
BACKEND_SCRIPTS: dict[str, str] = {
    "start": "node .",
    "dev": "nodemon .",
}


class Manifest:
    """An in-memory ``package.json`` bound to its file path."""

    FILENAME = "package.json"

    def __init__(self, path: Path, data: dict[str, Any]) -> None:
        self.path = path
        self.data = data

    @classmethod
    async def load(cls, directory: Path) -> "Manifest":
        """Read ``package.json`` from *directory*.

        Raises:
            ScaffoldError: If the file is missing or is not a JSON object.
        """
        path = Path(directory) / cls.FILENAME
        try:
            data = await asyncio.to_thread(load_json, path)
        except (OSError, ValueError) as exc:
            # json.JSONDecodeError is a ValueError
            raise ScaffoldError(f"Cannot read manifest {path}: {exc}") from exc
        return cls(path, data)

    async def save(self) -> Path:
        try:
            await save_json(self.data, self.path)
        except OSError as exc:
            raise ScaffoldError(f"Cannot write manifest {self.path}: {exc}") from exc
        return self.path

    # -- Mutations ---------------------------------------------------------

    def apply_backend_defaults(self) -> None:
        """Point the manifest at ``src/app.js`` as an ES module with start/dev scripts."""
        self.data["main"] = BACKEND_ENTRY_POINT
        self.data["type"] = BACKEND_MODULE_TYPE
        scripts = self.data.get("scripts")
        if not isinstance(scripts, dict):
            scripts = {}
        scripts.update(BACKEND_SCRIPTS)
        self.data["scripts"] = scripts

    def set_proxy(self, url: str) -> None:
        """Make the React dev server forward unknown requests to *url*."""
        self.data["proxy"] = url
