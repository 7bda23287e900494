"""Optional React client scaffolding via ``create-react-app``."""

from __future__ import annotations

from pathlib import Path

from servergen.config import ScaffoldConfig
from servergen.utils import console

from .commands import CommandRunner
from .manifest import Manifest


class ClientScaffolder:
    """Generates ``<project>/client`` and points its dev proxy at the backend."""

    def __init__(self, config: ScaffoldConfig, runner: CommandRunner) -> None:
        self.config = config
        self.runner = runner

    async def scaffold(self, project_root: Path) -> Path:
        """Create the React client and return its directory.

        ``CommandError`` propagates unchanged; files written earlier in the
        run are left in place.
        """
        client_root = project_root / self.config.client_dir

        await self.runner.run(
            [self.config.npx, "--yes", "create-react-app", self.config.client_dir],
            cwd=project_root,
        )
        if self.config.client_packages:
            await self.runner.run(
                [self.config.package_manager, "install", *self.config.client_packages],
                cwd=client_root,
            )

        manifest = await Manifest.load(client_root)
        manifest.set_proxy(self.config.proxy_url)
        await manifest.save()
        console.print(
            f"  [green]+[/green] {self.config.client_dir}/{Manifest.FILENAME} "
            f"proxy -> {self.config.proxy_url}"
        )
        return client_root
