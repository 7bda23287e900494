"""Boilerplate file emission.

Maps the user's toggles to the set of files a project gets, then renders
and writes each of them.  ``plan_files`` is the single source of truth for
which artifact each toggle produces:

==========================================  ==================================
artifact                                    emitted when
==========================================  ==================================
``src/app.js``, ``.env``,                   always
``public/index.html``
``src/routers/<component>.router.js``       routers and the component
``src/controllers/<component>.controller``  controllers and the component
``src/models/<component>.model.js``         models and the component
``src/views/index.hbs``,                    views
``src/views/layouts/main.hbs``
==========================================  ==================================
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from servergen.config import ScaffoldConfig
from servergen.prompts import Answers
from servergen.utils import console, print_error

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Component definitions
# ---------------------------------------------------------------------------

def _field(name: str, type_: str, required: bool = True, unique: bool = False) -> dict[str, Any]:
    return {"name": name, "type": type_, "required": required, "unique": unique}


#: Mongoose schema fields per resource component.
COMPONENT_FIELDS: dict[str, list[dict[str, Any]]] = {
    "user": [
        _field("name", "String"),
        _field("email", "String", unique=True),
        _field("password", "String"),
    ],
    "product": [
        _field("name", "String"),
        _field("description", "String", required=False),
        _field("price", "Number"),
        _field("stock", "Number"),
    ],
}


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlannedFile:
    """One file the emitter will write."""

    template: str
    output: str
    context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def _component_context(component: str) -> Mapping[str, Any]:
    fields = [dict(f) for f in COMPONENT_FIELDS[component]]
    return MappingProxyType({"component": component, "fields": fields})


def build_context(answers: Answers, config: ScaffoldConfig) -> dict[str, Any]:
    """Build the template context shared by every file of a project."""
    components = answers.components
    return {
        "project_name": answers.project_name,
        "port": config.backend_port,
        "db_uri": config.db_uri(answers.project_name),
        "routers": answers.routers,
        "controllers": answers.controllers,
        "models": answers.models,
        "views": answers.views,
        "components": components,
        "routed_components": components if answers.routers else [],
    }


def plan_files(answers: Answers) -> list[PlannedFile]:
    """Return the files a project with *answers* consists of, in write order.

    The result depends only on *answers*, so two runs with the same answers
    always produce the same file set.
    """
    planned = [
        PlannedFile("env.j2", ".env"),
        PlannedFile("public/index.html.j2", "public/index.html"),
    ]

    for component in answers.components:
        if answers.models:
            planned.append(
                PlannedFile(
                    "src/models/model.js.j2",
                    f"src/models/{component}.model.js",
                    _component_context(component),
                )
            )
        if answers.controllers:
            planned.append(
                PlannedFile(
                    "src/controllers/controller.js.j2",
                    f"src/controllers/{component}.controller.js",
                    _component_context(component),
                )
            )
        if answers.routers:
            planned.append(
                PlannedFile(
                    "src/routers/router.js.j2",
                    f"src/routers/{component}.router.js",
                    _component_context(component),
                )
            )

    if answers.views:
        planned.append(PlannedFile("src/views/index.hbs.j2", "src/views/index.hbs"))
        planned.append(
            PlannedFile("src/views/layouts/main.hbs.j2", "src/views/layouts/main.hbs")
        )

    planned.append(PlannedFile("src/app.js.j2", "src/app.js"))
    return planned


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------


@dataclass
class EmitResult:
    """Outcome of writing the planned files."""

    written: list[Path] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed


class TemplateEmitter:
    """Renders and writes the boilerplate files selected by ``plan_files``."""

    def __init__(self, renderer: TemplateRenderer, config: ScaffoldConfig) -> None:
        self.renderer = renderer
        self.config = config

    async def emit(self, project_root: Path, answers: Answers) -> EmitResult:
        """Write every planned file under *project_root*, overwriting existing ones.

        A file that cannot be written is reported and recorded in
        ``EmitResult.failed``; the remaining files are still written.
        """
        result = EmitResult()
        base_context = build_context(answers, self.config)

        for planned in plan_files(answers):
            target = project_root / planned.output
            try:
                path = await self.renderer.render_to_file(
                    planned.template, target, {**base_context, **planned.context}
                )
            except OSError as exc:
                print_error(f"  Could not write {planned.output}: {exc}")
                result.failed[planned.output] = str(exc)
                continue
            console.print(f"  [green]+[/green] {planned.output}")
            result.written.append(path)

        return result
