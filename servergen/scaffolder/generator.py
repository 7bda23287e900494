"""Main scaffolding orchestrator.

Takes validated ``Answers`` plus a ``ScaffoldConfig`` and produces an
Express project directory: npm manifest, boilerplate sources and, when
requested, a React client.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from servergen.config import ScaffoldConfig
from servergen.prompts import Answers
from servergen.utils import print_step_header

from .client import ClientScaffolder
from .commands import CommandRunner
from .emitter import TemplateEmitter
from .initializer import ProjectInitializer
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class ScaffoldResult:
    """Summary of one scaffolding run."""

    project_root: Path
    files_written: list[Path] = field(default_factory=list)
    files_failed: dict[str, str] = field(default_factory=dict)
    commands: list[str] = field(default_factory=list)
    client_root: Path | None = None
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return not self.files_failed


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Runs the scaffolding steps in order.

    1. Project directory, ``npm init`` and dependency install
    2. Boilerplate files for every enabled toggle
    3. React client (optional)
    """

    def __init__(
        self,
        answers: Answers,
        config: ScaffoldConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.answers = answers
        self.config = config or ScaffoldConfig()
        self.runner = runner or CommandRunner(timeout=self.config.command_timeout)
        self.renderer = TemplateRenderer()
        self.initializer = ProjectInitializer(self.config, self.runner)
        self.emitter = TemplateEmitter(self.renderer, self.config)
        self.client = ClientScaffolder(self.config, self.runner)

    @property
    def project_root(self) -> Path:
        return Path(self.config.output_dir) / self.answers.project_name

    async def generate(self) -> ScaffoldResult:
        """Generate the project and return a ``ScaffoldResult``.

        ``ScaffoldError`` (including ``CommandError``) aborts the run; files
        already written stay on disk.
        """
        start = time.monotonic()
        root = self.project_root
        result = ScaffoldResult(project_root=root)

        print_step_header(1, "Initialise project")
        await self.initializer.initialize(root, self.answers)

        print_step_header(2, "Write boilerplate")
        emitted = await self.emitter.emit(root, self.answers)
        result.files_written = emitted.written
        result.files_failed = emitted.failed

        if self.answers.react_client:
            print_step_header(3, "Create React client")
            result.client_root = await self.client.scaffold(root)

        result.commands = list(self.runner.history)
        result.duration_seconds = time.monotonic() - start
        return result
