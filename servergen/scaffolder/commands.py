"""External command execution for the scaffolder.

Wraps ``servergen.utils.run_command`` so that every npm/npx invocation is
logged, recorded, and turned into a ``CommandError`` when it fails.
"""

from __future__ import annotations

from pathlib import Path

from servergen import utils
from servergen.utils import console


class ScaffoldError(Exception):
    """Raised when a scaffolding step fails irrecoverably."""


class CommandError(ScaffoldError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str = "") -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed ({returncode}): {' '.join(cmd)}"
        if stderr:
            message += f"\n{stderr.strip()[-2000:]}"
        super().__init__(message)


class CommandRunner:
    """Runs external commands and keeps a log of everything it ran."""

    def __init__(self, timeout: int = 600) -> None:
        self.timeout = timeout
        self.history: list[str] = []

    async def run(self, cmd: list[str], cwd: Path) -> str:
        """Run *cmd* in *cwd* and return its stdout.

        Raises:
            CommandError: If the command cannot be started, times out, or
                exits with a non-zero status.
        """
        printable = " ".join(cmd)
        console.print(f"  [dim]$ {printable}[/dim]  [dim]({cwd})[/dim]")
        self.history.append(printable)

        try:
            returncode, stdout, stderr = await utils.run_command(
                cmd, cwd=cwd, timeout=self.timeout
            )
        except FileNotFoundError as exc:
            raise CommandError(cmd, 127, f"{cmd[0]}: command not found") from exc

        if returncode != 0:
            raise CommandError(cmd, returncode, stderr)
        return stdout
