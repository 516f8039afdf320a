"""Tests for the stepflow command-line interface."""

import json
import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

import stepflow
from stepflow import WorkflowEngine, WorkflowLoadError
from stepflow.cli import cli
from stepflow.loader import load_workflow

WORKFLOW_SOURCE = textwrap.dedent(
    """
    from stepflow import WorkflowEngine, step


    @step
    def double(context):
        context.result = context.input["value"] * 2


    @step
    def explode(context):
        if context.input.get("explode"):
            raise RuntimeError("exploded")


    @step
    def finish(context):
        context.metadata["finished"] = True


    def build():
        return WorkflowEngine("cli-workflow").add_steps([double, explode, finish])


    def broken():
        raise RuntimeError("factory broke")


    engine = build()
    not_an_engine = 42
    """
)


@pytest.fixture
def workflow_file(tmp_path):
    path = tmp_path / "sample_workflow.py"
    path.write_text(WORKFLOW_SOURCE)
    return str(path)


@pytest.fixture
def runner():
    return CliRunner()


class TestLoader:
    def test_loads_factory_function(self, workflow_file):
        engine = load_workflow(f"{workflow_file}:build")

        assert isinstance(engine, WorkflowEngine)
        assert [s.name for s in engine.steps] == ["double", "explode", "finish"]

    def test_loads_engine_attribute(self, workflow_file):
        assert load_workflow(f"{workflow_file}:engine").name == "cli-workflow"

    def test_module_attribute_must_be_engine(self):
        with pytest.raises(WorkflowLoadError, match="expected a WorkflowEngine, got Logger"):
            load_workflow("stepflow.engine:logger")

    @pytest.mark.parametrize(
        "target, reason",
        [
            ("no-colon", "expected 'module:attribute'"),
            ("missing_module_xyz:attr", "cannot import module"),
            ("stepflow.engine:missing", "has no attribute 'missing'"),
            ("/does/not/exist.py:build", "does not exist"),
        ],
    )
    def test_errors(self, target, reason):
        with pytest.raises(WorkflowLoadError, match=reason):
            load_workflow(target)

    def test_wrong_attribute_type(self, workflow_file):
        with pytest.raises(WorkflowLoadError, match="got int"):
            load_workflow(f"{workflow_file}:not_an_engine")

    def test_factory_that_raises(self, workflow_file):
        with pytest.raises(WorkflowLoadError, match="'broken' raised RuntimeError"):
            load_workflow(f"{workflow_file}:broken")

    def test_module_that_raises_on_import(self, tmp_path, monkeypatch):
        (tmp_path / "exploding_workflows.py").write_text('raise RuntimeError("import broke")\n')
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(WorkflowLoadError, match="error while importing: RuntimeError"):
            load_workflow("exploding_workflows:build")


class TestRunCommand:
    def test_json_output(self, runner, workflow_file):
        result = runner.invoke(
            cli, ["run", f"{workflow_file}:build", "--input", '{"value": 21}', "--json"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["workflow_name"] == "cli-workflow"
        assert data["result"] == 42
        assert data["successful"] is True
        assert data["metadata"] == {"finished": True}
        assert data["current_step_name"] == "finish"

    def test_failure_exits_with_one(self, runner, workflow_file):
        result = runner.invoke(
            cli,
            ["run", f"{workflow_file}:build", "--input", '{"value": 1, "explode": true}', "--json"],
        )

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["successful"] is False
        assert data["errors"][0]["step"] == "explode"
        assert data["errors"][0]["message"] == "exploded"
        assert "finished" not in data["metadata"]

    def test_continue_on_error(self, runner, workflow_file):
        result = runner.invoke(
            cli,
            [
                "run",
                f"{workflow_file}:build",
                "--input",
                '{"value": 1, "explode": true}',
                "--continue-on-error",
                "--json",
            ],
        )

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["metadata"]["finished"] is True
        assert len(data["errors"]) == 1

    def test_performance_flag(self, runner, workflow_file):
        result = runner.invoke(
            cli,
            ["run", f"{workflow_file}:build", "--input", '{"value": 2}', "--performance", "--json"],
        )

        assert result.exit_code == 0, result.output
        performance = json.loads(result.output)["metadata"]["performance"]
        assert set(performance["steps"]) == {"double", "explode", "finish"}
        assert performance["summary"]["count"] == 3

    def test_input_file(self, runner, workflow_file, tmp_path):
        input_path = tmp_path / "input.json"
        input_path.write_text('{"value": 5}')

        result = runner.invoke(
            cli, ["run", f"{workflow_file}:build", "--input-file", str(input_path), "--json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["result"] == 10

    def test_summary_output(self, runner, workflow_file):
        result = runner.invoke(
            cli,
            ["run", f"{workflow_file}:build", "--input", '{"value": 1, "explode": true}'],
        )

        assert result.exit_code == 1
        assert "Workflow: cli-workflow" in result.output
        assert "explode: exploded" in result.output

    def test_invalid_json(self, runner, workflow_file):
        result = runner.invoke(cli, ["run", f"{workflow_file}:build", "--input", "{not json"])

        assert result.exit_code == 2
        assert "invalid JSON" in result.output

    def test_both_inputs_rejected(self, runner, workflow_file, tmp_path):
        input_path = tmp_path / "input.json"
        input_path.write_text("{}")

        result = runner.invoke(
            cli,
            ["run", f"{workflow_file}:build", "--input", "{}", "--input-file", str(input_path)],
        )

        assert result.exit_code == 2
        assert "either --input or --input-file" in result.output

    def test_bad_target(self, runner):
        result = runner.invoke(cli, ["run", "missing_module_xyz:build"])

        assert result.exit_code == 2
        assert "Cannot load workflow" in result.output

    def test_factory_error_is_a_usage_error(self, runner, workflow_file):
        result = runner.invoke(cli, ["run", f"{workflow_file}:broken"])

        assert result.exit_code == 2
        assert "factory broke" in result.output

    def test_import_error_is_a_usage_error(self, runner, tmp_path, monkeypatch):
        (tmp_path / "broken_on_import.py").write_text('raise RuntimeError("import broke")\n')
        monkeypatch.syspath_prepend(str(tmp_path))

        result = runner.invoke(cli, ["run", "broken_on_import:build"])

        assert result.exit_code == 2
        assert "import broke" in result.output


def run_stepflow(*args):
    """Run the CLI in a fresh interpreter so logging starts unconfigured."""
    env = dict(os.environ)
    env.pop("STEPFLOW_LOG_LEVEL", None)
    root = str(Path(stepflow.__file__).resolve().parent.parent)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [root, env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "stepflow", *args],
        capture_output=True,
        text=True,
        env=env,
        timeout=60,
    )


class TestConsoleFlag:
    def test_console_events_reach_stderr(self, workflow_file):
        result = run_stepflow("run", f"{workflow_file}:engine", "--input", '{"value": 3}', "--console")

        assert result.returncode == 0, result.stderr
        assert "Starting step: double" in result.stderr
        assert "Workflow cli-workflow completed successfully" in result.stderr
        assert "Starting step" not in result.stdout

    def test_explicit_log_level_wins(self, workflow_file):
        result = run_stepflow(
            "--log-level", "WARNING", "run", f"{workflow_file}:engine", "--input", '{"value": 3}', "--console"
        )

        assert result.returncode == 0, result.stderr
        assert "Starting step" not in result.stderr


class TestDescribeCommand:
    def test_lists_steps(self, runner, workflow_file):
        result = runner.invoke(cli, ["describe", f"{workflow_file}:build"])

        assert result.exit_code == 0, result.output
        assert "Workflow: cli-workflow" in result.output
        assert "1. double (BasicStep)" in result.output
        assert "3. finish (BasicStep)" in result.output
        assert "Observers (0):" in result.output
