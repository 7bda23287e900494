"""Project directory and ``package.json`` initialisation."""

from __future__ import annotations

import asyncio
from pathlib import Path

from servergen.config import ScaffoldConfig
from servergen.prompts import Answers
from servergen.utils import console

from .commands import CommandRunner, ScaffoldError
from .manifest import Manifest


def project_directories(answers: Answers) -> list[str]:
    """Directories (relative to the project root) a project needs."""
    dirs = ["src", "public"]
    if answers.routers:
        dirs.append("src/routers")
    if answers.controllers:
        dirs.append("src/controllers")
    if answers.models:
        dirs.append("src/models")
    if answers.views:
        dirs.extend(["src/views", "src/views/layouts"])
    return dirs


def runtime_dependencies(answers: Answers) -> list[str]:
    """npm packages the generated ``src/app.js`` imports."""
    deps = ["express", "dotenv"]
    if answers.models:
        deps.append("mongoose")
    if answers.views:
        deps.append("express-handlebars")
    return deps


DEV_DEPENDENCIES: list[str] = ["nodemon"]


class ProjectInitializer:
    """Creates the project tree, runs ``npm init``/``npm install`` and patches the manifest."""

    def __init__(self, config: ScaffoldConfig, runner: CommandRunner) -> None:
        self.config = config
        self.runner = runner

    async def initialize(self, project_root: Path, answers: Answers) -> Manifest:
        """Prepare *project_root* and return its patched manifest.

        Existing directories are reused.  Raises ``CommandError`` when npm
        fails and ``ScaffoldError`` when a directory cannot be created.
        """
        await self._mkdir(project_root)
        console.print(f"  [green]+[/green] {project_root}")

        pm = self.config.package_manager
        await self.runner.run([pm, "init", "-y"], cwd=project_root)

        # Directory creation and the install touch disjoint paths.
        jobs = [self._mkdir(project_root / d) for d in project_directories(answers)]
        if self.config.install_dependencies:
            jobs.append(self._install(project_root, answers))
        outcomes = await asyncio.gather(*jobs, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        manifest = await Manifest.load(project_root)
        manifest.apply_backend_defaults()
        await manifest.save()
        console.print(f"  [green]+[/green] {Manifest.FILENAME} patched")
        return manifest

    async def _install(self, project_root: Path, answers: Answers) -> None:
        pm = self.config.package_manager
        await self.runner.run(
            [pm, "install", *runtime_dependencies(answers)], cwd=project_root
        )
        await self.runner.run(
            [pm, "install", "--save-dev", *DEV_DEPENDENCIES], cwd=project_root
        )

    async def _mkdir(self, path: Path) -> None:
        try:
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldError(f"Cannot create directory {path}: {exc}") from exc
