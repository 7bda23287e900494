"""servergen configuration.

Typed settings for a scaffolding run. Pydantic v2 models validate values at
construction time; ``from_env`` lets CI or wrapper scripts tune a run without
touching the command line.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Global settings for one scaffolding run.

    Instances are created once by the CLI entry point and passed to
    ``ProjectGenerator`` and its sub-components.
    """

    output_dir: Path = Field(
        default=Path("."), description="Parent directory of the generated project"
    )
    backend_port: int = Field(default=8080, ge=1, le=65535)
    package_manager: str = Field(default="npm", min_length=1)
    npx: str = Field(default="npx", min_length=1)
    client_dir: str = Field(default="client", min_length=1)
    client_packages: list[str] = Field(
        default_factory=lambda: ["axios", "react-router-dom"]
    )
    command_timeout: int = Field(
        default=600, ge=10, description="Per-command timeout in seconds"
    )
    install_dependencies: bool = Field(
        default=True, description="Run the package manager install step"
    )
    db_uri_template: str = Field(default="mongodb://localhost:27017/{project_name}")

    @property
    def proxy_url(self) -> str:
        """URL the React dev server proxies API calls to."""
        return f"http://localhost:{self.backend_port}"

    def db_uri(self, project_name: str) -> str:
        """Return the MongoDB connection string written to ``.env``."""
        return self.db_uri_template.format(project_name=project_name)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SERVERGEN_OUTPUT_DIR, SERVERGEN_BACKEND_PORT,
            SERVERGEN_PACKAGE_MANAGER, SERVERGEN_COMMAND_TIMEOUT,
            SERVERGEN_INSTALL_DEPENDENCIES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SERVERGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SERVERGEN_OUTPUT_DIR"])
        if os.environ.get("SERVERGEN_BACKEND_PORT"):
            kwargs["backend_port"] = int(os.environ["SERVERGEN_BACKEND_PORT"])
        if os.environ.get("SERVERGEN_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["SERVERGEN_PACKAGE_MANAGER"]
        if os.environ.get("SERVERGEN_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["SERVERGEN_COMMAND_TIMEOUT"])
        if os.environ.get("SERVERGEN_INSTALL_DEPENDENCIES"):
            kwargs["install_dependencies"] = (
                os.environ["SERVERGEN_INSTALL_DEPENDENCIES"].strip().lower() in _TRUTHY
            )
        return cls(**kwargs)
