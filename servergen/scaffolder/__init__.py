"""servergen scaffolder -- generates Express project structures.

Quick usage::

    from servergen.prompts import Answers
    from servergen.scaffolder import ProjectGenerator

    answers = Answers(project_name="demo", products=False)
    result = await ProjectGenerator(answers).generate()
"""

from servergen.scaffolder.commands import CommandError, CommandRunner, ScaffoldError
from servergen.scaffolder.emitter import PlannedFile, TemplateEmitter, plan_files
from servergen.scaffolder.generator import ProjectGenerator, ScaffoldResult
from servergen.scaffolder.manifest import Manifest
from servergen.scaffolder.templates import TemplateRenderer

__all__ = [
    "CommandError",
    "CommandRunner",
    "Manifest",
    "PlannedFile",
    "ProjectGenerator",
    "ScaffoldError",
    "ScaffoldResult",
    "TemplateEmitter",
    "TemplateRenderer",
    "plan_files",
]
