"""Tests for toggle-to-file planning and emission."""

from __future__ import annotations

import itertools
from pathlib import Path
from unittest.mock import patch

import pytest

from servergen.config import ScaffoldConfig
from servergen.prompts import Answers
from servergen.scaffolder.emitter import (
    COMPONENT_FIELDS,
    EmitResult,
    TemplateEmitter,
    build_context,
    plan_files,
)
from servergen.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit

ALWAYS = {".env", "public/index.html", "src/app.js"}


def _outputs(answers: Answers) -> set[str]:
    return {planned.output for planned in plan_files(answers)}


# ---------------------------------------------------------------------------
# plan_files
# ---------------------------------------------------------------------------


class TestPlanFiles:
    def test_everything_enabled(self):
        assert _outputs(Answers(project_name="demo")) == ALWAYS | {
            "src/routers/user.router.js",
            "src/routers/product.router.js",
            "src/controllers/user.controller.js",
            "src/controllers/product.controller.js",
            "src/models/user.model.js",
            "src/models/product.model.js",
            "src/views/index.hbs",
            "src/views/layouts/main.hbs",
        }

    def test_everything_disabled(self):
        answers = Answers(
            project_name="demo",
            users=False,
            products=False,
            routers=False,
            models=False,
            controllers=False,
            views=False,
        )
        assert _outputs(answers) == ALWAYS

    def test_demo_scenario(self, demo_answers: Answers):
        outputs = _outputs(demo_answers)
        assert "src/routers/user.router.js" in outputs
        assert "src/models/user.model.js" in outputs
        assert "src/controllers/user.controller.js" in outputs
        assert "src/views/index.hbs" in outputs
        assert not any("product" in output for output in outputs)

    def test_routers_off_means_no_router_files(self):
        outputs = _outputs(Answers(project_name="demo", routers=False))
        assert not any(output.startswith("src/routers/") for output in outputs)

    def test_users_off_means_no_user_files(self):
        outputs = _outputs(Answers(project_name="demo", users=False))
        assert not any("user" in output for output in outputs)

    @pytest.mark.parametrize(
        "flags", list(itertools.product([True, False], repeat=6))
    )
    def test_every_combination_matches_toggles(self, flags):
        users, products, routers, models, controllers, views = flags
        answers = Answers(
            project_name="demo",
            users=users,
            products=products,
            routers=routers,
            models=models,
            controllers=controllers,
            views=views,
        )
        outputs = _outputs(answers)
        for component, enabled in (("user", users), ("product", products)):
            assert (f"src/routers/{component}.router.js" in outputs) == (enabled and routers)
            assert (f"src/models/{component}.model.js" in outputs) == (enabled and models)
            assert (
                f"src/controllers/{component}.controller.js" in outputs
            ) == (enabled and controllers)
        assert ("src/views/index.hbs" in outputs) == views
        assert ALWAYS <= outputs

    def test_deterministic(self, full_answers: Answers):
        assert plan_files(full_answers) == plan_files(full_answers)

    def test_app_js_written_last(self, full_answers: Answers):
        assert plan_files(full_answers)[-1].output == "src/app.js"

    def test_component_context(self, full_answers: Answers):
        model = next(p for p in plan_files(full_answers) if p.output == "src/models/product.model.js")
        assert model.context["component"] == "product"
        assert model.context["fields"] == COMPONENT_FIELDS["product"]

    def test_component_files_do_not_share_context(self, full_answers: Answers):
        planned = [p for p in plan_files(full_answers) if "product" in p.output]
        assert len(planned) == 3
        assert len({id(p.context) for p in planned}) == 3
        assert planned[0].context["fields"] is not planned[1].context["fields"]
        with pytest.raises(TypeError):
            planned[0].context["component"] = "user"
        planned[0].context["fields"].append({"name": "sku"})
        assert planned[1].context["fields"] == COMPONENT_FIELDS["product"]


def test_build_context():
    ctx = build_context(
        Answers(project_name="demo", routers=False, products=False),
        ScaffoldConfig(backend_port=3001),
    )
    assert ctx["project_name"] == "demo"
    assert ctx["port"] == 3001
    assert ctx["db_uri"] == "mongodb://localhost:27017/demo"
    assert ctx["components"] == ["user"]
    assert ctx["routed_components"] == []


# ---------------------------------------------------------------------------
# TemplateEmitter
# ---------------------------------------------------------------------------


@pytest.fixture
def emitter() -> TemplateEmitter:
    return TemplateEmitter(TemplateRenderer(), ScaffoldConfig())


class TestTemplateEmitter:
    async def test_writes_planned_files(self, emitter, demo_answers, tmp_path: Path):
        result = await emitter.emit(tmp_path, demo_answers)
        assert result.success
        written = {p.relative_to(tmp_path).as_posix() for p in result.written}
        assert written == _outputs(demo_answers)
        for relative in written:
            assert (tmp_path / relative).is_file()

    async def test_overwrites_existing(self, emitter, demo_answers, tmp_path: Path):
        app = tmp_path / "src" / "app.js"
        app.parent.mkdir(parents=True)
        app.write_text("old", encoding="utf-8")
        await emitter.emit(tmp_path, demo_answers)
        assert app.read_text(encoding="utf-8").startswith("import express")

    async def test_write_failure_is_recorded_and_others_continue(
        self, emitter, demo_answers, tmp_path: Path
    ):
        real = emitter.renderer.render_to_file

        async def flaky(template, output, context):
            if Path(output).name == ".env":
                raise PermissionError("read-only")
            return await real(template, output, context)

        with patch.object(emitter.renderer, "render_to_file", side_effect=flaky):
            result = await emitter.emit(tmp_path, demo_answers)

        assert not result.success
        assert result.failed == {".env": "read-only"}
        assert (tmp_path / "src" / "app.js").is_file()
        assert not (tmp_path / ".env").exists()


def test_emit_result_success_flag():
    assert EmitResult().success
    assert not EmitResult(failed={"x": "y"}).success
