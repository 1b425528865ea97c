"""CLI entrypoint — pick a backend, run its scaffold flow, wait for the handoff."""
from __future__ import annotations

import asyncio
import shlex
from pathlib import Path

import click

from javascaffold.config import Config
from javascaffold.errors import ExecutableNotFoundError, ProcessFailure, ScaffoldError
from javascaffold.forms import ClickPrompter
from javascaffold.notifier import CommandNotifier
from javascaffold.pipeline.commands import GRADLE_DSLS, GRADLE_TEST_FRAMEWORKS, GRADLE_TYPES
from javascaffold.pipeline.models import (
    ExecutionStatus,
    GradleRequest,
    MavenRequest,
    ScaffoldExecution,
)
from javascaffold.pipeline.scaffolder import ScaffoldOrchestrator

_dir_type = click.Path(file_okay=False, path_type=Path)


async def _wait_for(execution: ScaffoldExecution) -> None:
    """Wait for the process to exit and turn a failed status into an error."""
    status = await execution.wait()
    if status is ExecutionStatus.SUCCEEDED:
        return
    terminal = execution.terminal_status or ""
    if terminal.startswith("failed to start"):
        raise ExecutableNotFoundError(terminal.strip())
    raise ProcessFailure(execution.backend.value, terminal)


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except ScaffoldError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.pass_context
def main(ctx):
    """java-scaffold - create Java projects with Maven, Gradle, or Spring Initializr."""
    ctx.obj = Config.from_env()


@main.command()
@click.option("--parent-dir", type=_dir_type, default=".", show_default=True)
@click.option("--group-id", prompt=True, default="com.example")
@click.option("--artifact-id", prompt=True, default="demo")
@click.option("--archetype", "archetype_artifact_id", prompt=True,
              default="maven-archetype-quickstart")
@click.pass_obj
def maven(config, parent_dir, group_id, artifact_id, archetype_artifact_id):
    """Generate a project from a Maven archetype."""
    req = MavenRequest(
        parent_dir=parent_dir.absolute(),
        group_id=group_id,
        artifact_id=artifact_id,
        archetype_artifact_id=archetype_artifact_id,
    )

    async def flow() -> None:
        orchestrator = ScaffoldOrchestrator(config)
        await _wait_for(await orchestrator.scaffold(req))

    _run(flow())


@main.command()
@click.option("--parent-dir", type=_dir_type, default=".", show_default=True)
@click.option("--name", "project_name", prompt=True, default="demo")
@click.option("--dsl", type=click.Choice(GRADLE_DSLS), prompt=True, default="groovy")
@click.option("--type", "project_type", type=click.Choice(GRADLE_TYPES), prompt=True,
              default="java-application")
@click.option("--test-framework", type=click.Choice(GRADLE_TEST_FRAMEWORKS), prompt=True,
              default="junit-jupiter")
@click.pass_obj
def gradle(config, parent_dir, project_name, dsl, project_type, test_framework):
    """Generate a project with gradle init."""
    req = GradleRequest(
        parent_dir=parent_dir.absolute(),
        project_name=project_name,
        dsl=dsl,
        type=project_type,
        test_framework=test_framework,
    )

    async def flow() -> None:
        orchestrator = ScaffoldOrchestrator(config)
        await _wait_for(await orchestrator.scaffold(req))

    _run(flow())


@main.command()
@click.option("--name", "project_name", prompt=True, default="demo")
@click.option("--dest-dir", type=_dir_type, default=None,
              help="Where to save the archive (defaults to DOWNLOAD_DIR)")
@click.pass_obj
def spring(config, project_name, dest_dir):
    """Download a project archive from Spring Initializr."""
    dest = (dest_dir or Path(config.download_dir)).absolute()

    async def flow() -> None:
        orchestrator = ScaffoldOrchestrator(config)
        req = await orchestrator.collect_spring_request(ClickPrompter(), project_name, dest)
        await orchestrator.scaffold(req)

    _run(flow())


@main.command()
@click.argument("goal", nargs=-1, required=True)
@click.option("--dir", "start_dir", type=_dir_type, default=".", show_default=True)
@click.pass_obj
def task(config, goal, start_dir):
    """Run a build goal (e.g. 'clean package') against the nearest build file."""

    async def flow() -> None:
        orchestrator = ScaffoldOrchestrator(config)
        await _wait_for(orchestrator.run_task(shlex.join(goal), start_dir))

    _run(flow())


@main.group()
def notify():
    """Send one-way notifications to the language server."""


@notify.command("config-changed")
@click.argument("build_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def config_changed(config, build_file):
    """Tell the language server a build file changed."""
    notifier = CommandNotifier(config.language_server_url)
    asyncio.run(notifier.notify_build_config_changed(build_file))


@notify.command("build")
@click.pass_obj
def build(config):
    """Ask the language server to build the workspace."""
    notifier = CommandNotifier(config.language_server_url)
    asyncio.run(notifier.trigger_workspace_build())


def run() -> None:
    """Console-script entrypoint."""
    main(prog_name="java-scaffold")


if __name__ == "__main__":
    run()
