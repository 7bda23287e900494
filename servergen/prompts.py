"""Interactive question flow.

Asks for the project name and the feature toggles that decide which files
the scaffolder emits.  Questions are declared as data (``Question``) so the
order, defaults and skip logic can be inspected and tested without a
terminal; the actual prompting is delegated to ``rich.prompt``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping

from pydantic import BaseModel, ConfigDict, field_validator
from rich.prompt import Confirm, Prompt

from servergen.utils import console, print_error


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

#: Camel-case keys accepted by ``Answers.from_mapping`` for answer files
#: written by the older JavaScript scripts.
LEGACY_KEYS: dict[str, str] = {
    "projectName": "project_name",
    "opInstallAutomatically": "install_automatically",
    "opUsers": "users",
    "opProducts": "products",
    "opRouters": "routers",
    "opModels": "models",
    "opControllers": "controllers",
    "opViews": "views",
    "opReactProject": "react_client",
}


def validate_project_name(value: str) -> str | None:
    """Return an error message for an unusable project name, else ``None``."""
    name = (value or "").strip()
    if not name:
        return "Please enter a project name."
    if any(ch.isupper() for ch in name):
        return "Project names must be lowercase (npm rejects uppercase package names)."
    if "/" in name or "\\" in name or name in (".", ".."):
        return "Project names must be a single directory name."
    return None


class Answers(BaseModel):
    """Answers collected from the user.  Immutable once built."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    install_automatically: bool = False
    users: bool = True
    products: bool = True
    routers: bool = True
    models: bool = True
    controllers: bool = True
    views: bool = True
    react_client: bool = True

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        error = validate_project_name(value)
        if error:
            raise ValueError(error)
        return value.strip()

    @property
    def components(self) -> list[str]:
        """Enabled resource components, in generation order."""
        enabled = []
        if self.users:
            enabled.append("user")
        if self.products:
            enabled.append("product")
        return enabled

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Answers":
        """Build ``Answers`` from a mapping using snake_case or legacy camelCase keys."""
        normalised = {LEGACY_KEYS.get(key, key): value for key, value in data.items()}
        return cls.model_validate(normalised)


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Question:
    """A single prompt in the question flow."""

    key: str
    message: str
    kind: Literal["text", "confirm"] = "confirm"
    default: Any = None
    when: Callable[[Mapping[str, Any]], bool] | None = None
    validate: Callable[[str], str | None] | None = None

    def is_visible(self, answers: Mapping[str, Any]) -> bool:
        return self.when is None or bool(self.when(answers))


def _manual(answers: Mapping[str, Any]) -> bool:
    return not answers.get("install_automatically", False)


def build_questions() -> list[Question]:
    """Return the question flow in the order it is asked."""
    return [
        Question(
            "project_name",
            "Project name",
            kind="text",
            validate=validate_project_name,
        ),
        Question(
            "install_automatically",
            "Install every component automatically?",
            default=False,
        ),
        Question("users", "Add the users component?", default=True),
        Question("products", "Add the products component?", default=True),
        Question("routers", "Generate routers?", default=True, when=_manual),
        Question("models", "Generate models?", default=True, when=_manual),
        Question("controllers", "Generate controllers?", default=True, when=_manual),
        Question("views", "Generate views?", default=True, when=_manual),
        Question("react_client", "Create a React client?", default=True, when=_manual),
    ]


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


def _ask_text(message: str, default: str | None) -> str:
    if default is None:
        return Prompt.ask(message, console=console)
    return Prompt.ask(message, default=default, console=console)


def _ask_confirm(message: str, default: bool) -> bool:
    return Confirm.ask(message, default=default, console=console)


def collect_answers(
    questions: list[Question] | None = None,
    *,
    ask_text: Callable[[str, str | None], str] | None = None,
    ask_confirm: Callable[[str, bool], bool] | None = None,
    preset: Mapping[str, Any] | None = None,
) -> Answers:
    """Walk the question flow and return the completed ``Answers``.

    Args:
        questions: Question flow; defaults to ``build_questions()``.
        ask_text: Callable used for free-text questions.  Defaults to
            ``rich.prompt.Prompt.ask``.
        ask_confirm: Callable used for yes/no questions.  Defaults to
            ``rich.prompt.Confirm.ask``.
        preset: Answers supplied up front (e.g. from CLI flags); those keys
            are not asked.

    A question hidden by its ``when`` predicate takes its default.  Invalid
    text input is reported and asked again.
    """
    questions = questions if questions is not None else build_questions()
    ask_text = ask_text or _ask_text
    ask_confirm = ask_confirm or _ask_confirm

    collected: dict[str, Any] = dict(preset or {})
    for question in questions:
        if question.key in collected:
            continue
        if not question.is_visible(collected):
            collected[question.key] = question.default
            continue

        if question.kind == "confirm":
            collected[question.key] = bool(
                ask_confirm(question.message, bool(question.default))
            )
            continue

        while True:
            value = ask_text(question.message, question.default)
            error = question.validate(value) if question.validate else None
            if error is None:
                collected[question.key] = (value or "").strip()
                break
            print_error(error)

    return Answers.from_mapping(collected)
