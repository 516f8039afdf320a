"""stepflow CLI - run and inspect workflows from the command line.

Usage:
    stepflow run TARGET [--input JSON | --input-file PATH] [--continue-on-error]
                        [--console] [--performance] [--json]
    stepflow describe TARGET

TARGET is ``package.module:attr`` or ``path/to/file.py:attr`` where ``attr``
is a WorkflowEngine or a function returning one.

Examples:
    # Run a workflow with JSON input
    stepflow run myapp.workflows:orders --input '{"order_id": 7}'

    # Run with step logging and timings, print the context as JSON
    stepflow --log-level INFO run workflows.py:build --console --performance --json

    # Show the steps of a workflow
    stepflow describe workflows.py:build
"""

import asyncio
import json
import logging
import sys

import click

from .loader import load_workflow
from .observers import ConsoleObserver, PerformanceObserver
from .types import WorkflowLoadError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Send stepflow log records to stderr at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _load(target):
    try:
        return load_workflow(target)
    except WorkflowLoadError as e:
        raise click.BadParameter(str(e), param_hint="TARGET") from e


def _read_input(raw_input, input_file):
    if raw_input is not None and input_file is not None:
        raise click.UsageError("Use either --input or --input-file, not both")

    if input_file is not None:
        raw_input = input_file.read()
        source = "--input-file"
    else:
        source = "--input"

    if raw_input is None:
        return None

    try:
        return json.loads(raw_input)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint=source) from e


@click.group()
@click.option('--log-level', default='WARNING', envvar='STEPFLOW_LOG_LEVEL',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level (default: WARNING)')
@click.pass_context
def cli(ctx, log_level):
    """stepflow - run sequential async workflows."""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = log_level
    ctx.obj['log_level_default'] = (
        ctx.get_parameter_source('log_level') == click.core.ParameterSource.DEFAULT
    )


@cli.command()
@click.argument('target')
@click.option('--input', 'raw_input', help='Workflow input as a JSON string')
@click.option('--input-file', type=click.File('r'), help='Read workflow input from a JSON file')
@click.option('--continue-on-error', is_flag=True, help='Run remaining steps after a failure')
@click.option('--console/--no-console', default=False, help='Log workflow events')
@click.option('--performance', is_flag=True, help='Record step durations in the metadata')
@click.option('--json', 'as_json', is_flag=True, help='Print the final context as JSON')
@click.pass_context
def run(ctx, target, raw_input, input_file, continue_on_error, console, performance, as_json):
    """Execute a workflow and report the outcome."""
    engine = _load(target)
    input_data = _read_input(raw_input, input_file)

    if continue_on_error:
        engine.options.continue_on_error = True
    if console:
        engine.add_observer(ConsoleObserver())
        # --console implies INFO unless --log-level was given
        if ctx.obj.get('log_level_default', True):
            logging.getLogger('stepflow').setLevel(logging.INFO)
    if performance:
        engine.add_observer(PerformanceObserver())

    context = asyncio.run(engine.execute(input_data))

    if as_json:
        click.echo(json.dumps(context.to_dict(), indent=2, default=str))
    else:
        status_symbol = '✅' if context.successful else '❌'
        click.echo("=" * 60)
        click.echo(f"  Workflow: {context.workflow_name}")
        click.echo("=" * 60)
        click.echo(f"  ID:        {context.workflow_id}")
        click.echo(f"  Status:    {status_symbol} {'completed' if context.successful else 'failed'}")
        click.echo(f"  Duration:  {context.duration_ms:.3f}ms")
        if context.current_step_name:
            click.echo(f"  Last step: {context.current_step_name}")
        click.echo(f"  Result:    {json.dumps(context.result, default=str)}")

        if context.errors:
            click.echo(f"\n❌ Errors ({len(context.errors)}):")
            for error in context.errors:
                click.echo(f"  - {error.step}: {error.message}")

        steps = context.metadata.get('performance', {}).get('steps_by_duration')
        if steps:
            click.echo("\n📊 Step durations:")
            for name, duration in steps.items():
                click.echo(f"  {name:<30} {duration:.3f}ms")

    if not context.successful:
        sys.exit(1)


@cli.command()
@click.argument('target')
def describe(target):
    """Show the configuration, steps and observers of a workflow."""
    engine = _load(target)
    options = engine.options

    click.echo(f"Workflow: {engine.name}")
    click.echo(f"  continue_on_error: {options.continue_on_error}")
    click.echo(f"  max_concurrency:   {options.max_concurrency}")
    if options.workflow_id:
        click.echo(f"  workflow_id:       {options.workflow_id}")

    click.echo(f"\nSteps ({len(engine.steps)}):")
    for index, step in enumerate(engine.steps, start=1):
        click.echo(f"  {index}. {step.name} ({type(step).__name__})")

    click.echo(f"\nObservers ({len(engine.observers)}):")
    for observer in engine.observers:
        click.echo(f"  - {type(observer).__name__}")


if __name__ == '__main__':
    cli(obj={})
