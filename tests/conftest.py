"""Shared pytest fixtures for the servergen test suite.

Provides reusable fixtures for:
- A fake ``run_command`` that stands in for npm/npx
- Sample answer sets
- A ``ScaffoldConfig`` rooted in ``tmp_path``
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from servergen.config import ScaffoldConfig
from servergen.prompts import Answers


# ---------------------------------------------------------------------------
# Fake npm / npx
# ---------------------------------------------------------------------------


class FakeNpm:
    """Records commands and simulates the files npm and create-react-app write.

    ``fail_on`` holds substrings; a command whose joined text contains one of
    them exits with status 1.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self.fail_on: set[str] = set()

    @property
    def commands(self) -> list[str]:
        return [" ".join(cmd) for cmd, _ in self.calls]

    async def __call__(
        self,
        cmd: list[str],
        cwd: str | Path | None = None,
        timeout: int = 600,
        env: dict[str, str] | None = None,
    ) -> tuple[int, str, str]:
        cwd_path = Path(cwd) if cwd else Path.cwd()
        self.calls.append((list(cmd), cwd_path))
        joined = " ".join(cmd)

        if any(pattern in joined for pattern in self.fail_on):
            return (1, "", f"npm ERR! simulated failure for {joined}")

        if cmd[1:3] == ["init", "-y"]:
            manifest = {
                "name": cwd_path.name,
                "version": "1.0.0",
                "main": "index.js",
                "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
                "license": "ISC",
            }
            (cwd_path / "package.json").write_text(
                json.dumps(manifest, indent=2), encoding="utf-8"
            )
        elif "create-react-app" in cmd:
            client = cwd_path / cmd[-1]
            client.mkdir(parents=True, exist_ok=True)
            (client / "package.json").write_text(
                json.dumps({"name": cmd[-1], "private": True, "scripts": {}}),
                encoding="utf-8",
            )
        return (0, "added 1 package", "")


@pytest.fixture
def fake_npm():
    """Patch ``servergen.utils.run_command`` with a ``FakeNpm`` instance."""
    fake = FakeNpm()
    with patch("servergen.utils.run_command", side_effect=fake.__call__):
        yield fake


# ---------------------------------------------------------------------------
# Answers & config
# ---------------------------------------------------------------------------


@pytest.fixture
def demo_answers() -> Answers:
    """Users only, every layer enabled, no React client."""
    return Answers.from_mapping({
        "projectName": "demo",
        "opUsers": True,
        "opProducts": False,
        "opRouters": True,
        "opModels": True,
        "opViews": True,
        "opReactProject": False,
    })


@pytest.fixture
def full_answers() -> Answers:
    return Answers(project_name="full-app")


@pytest.fixture
def config(tmp_path: Path) -> ScaffoldConfig:
    return ScaffoldConfig(output_dir=tmp_path, command_timeout=30)
