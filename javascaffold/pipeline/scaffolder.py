"""Scaffold flows: resolve the tool, build the command, launch, and hand off on success."""
from __future__ import annotations

import shlex
import sys
from pathlib import Path

from javascaffold.config import Config
from javascaffold.errors import ValidationError
from javascaffold.forms import DEFAULT_EXCLUDED, Prompter, choose_dependencies, walk_schema
from javascaffold.pipeline.commands import (
    build_download_url,
    build_gradle_command,
    build_maven_command,
)
from javascaffold.pipeline.download import NetworkScaffoldRunner, archive_name
from javascaffold.pipeline.handoff import CompletionHandoff, ConsoleHost, DirectoryHost
from javascaffold.pipeline.models import (
    Backend,
    ExecutionStatus,
    GradleRequest,
    MavenRequest,
    ScaffoldExecution,
    ScaffoldRequest,
    SpringRequest,
)
from javascaffold.pipeline.process import ProcessScaffoldRunner, is_finished
from javascaffold.project import find_build_file
from javascaffold.resolver import resolve_build_tool
from javascaffold.schema import SchemaCache


class ScaffoldOrchestrator:
    """Owns the schema cache and runners shared by every flow it starts.

    Per-flow state lives on the ScaffoldExecution each flow creates; the exit
    callback closes over that execution, so flows launched back to back each
    hand off to their own destination.
    """

    def __init__(
        self,
        config: Config,
        host: DirectoryHost | None = None,
        process_runner: ProcessScaffoldRunner | None = None,
    ):
        self.config = config
        self.handoff = CompletionHandoff(host or ConsoleHost())
        self.schema_cache = SchemaCache(
            url=config.initializr_url,
            accept=config.initializr_accept,
        )
        self.process_runner = process_runner or ProcessScaffoldRunner()
        self.network_runner = NetworkScaffoldRunner(self.handoff)

    async def scaffold(self, req: ScaffoldRequest) -> ScaffoldExecution | Path:
        """Start the backend matching the request type.

        Local backends return their in-flight execution; the remote backend
        returns the saved archive once the download completes.
        """
        match req:
            case MavenRequest():
                return self.scaffold_maven(req)
            case GradleRequest():
                return self.scaffold_gradle(req)
            case SpringRequest():
                return await self.scaffold_spring(req)
        raise ValidationError(f"Unsupported scaffold request: {type(req).__name__}")

    # ── Local backends ────────────────────────────────────────────────

    def scaffold_maven(self, req: MavenRequest) -> ScaffoldExecution:
        parent = Path(req.parent_dir)
        executable = resolve_build_tool(
            self.config.maven_command, self.config.maven_wrapper, parent
        )
        argv = build_maven_command(executable, req)
        execution = ScaffoldExecution(
            backend=Backend.MAVEN,
            working_dir=parent,
            destination_dir=req.destination_dir,
        )
        return self._launch(execution, argv)

    def scaffold_gradle(self, req: GradleRequest) -> ScaffoldExecution:
        parent = Path(req.parent_dir)
        executable = resolve_build_tool(
            self.config.gradle_command, self.config.gradle_wrapper, parent
        )
        # Validate before touching the filesystem
        argv = build_gradle_command(executable, req)

        destination = req.destination_dir
        destination.mkdir(parents=True, exist_ok=True)
        execution = ScaffoldExecution(
            backend=Backend.GRADLE,
            working_dir=destination,
            destination_dir=destination,
        )
        return self._launch(execution, argv)

    def _launch(self, execution: ScaffoldExecution, argv: list[str]) -> ScaffoldExecution:
        def on_exit(status: str) -> None:
            execution.terminal_status = status
            if is_finished(status):
                execution.status = ExecutionStatus.SUCCEEDED
                self.handoff.fire(execution.destination_dir, refresh=execution.working_dir)
            else:
                execution.status = ExecutionStatus.FAILED
                print(
                    f"[scaffold] {execution.backend.value} scaffold of "
                    f"{execution.destination_dir} failed: {status.strip()}",
                    file=sys.stderr,
                )

        execution.handle = self.process_runner.launch(
            execution.working_dir, argv, on_exit, label=execution.backend.value
        )
        return execution

    # ── Remote backend ────────────────────────────────────────────────

    async def collect_spring_request(
        self,
        prompter: Prompter,
        project_name: str,
        dest_dir: str | Path,
    ) -> SpringRequest:
        """Fetch the (cached) schema and ask the user for every parameter."""
        schema = await self.schema_cache.fetch()
        params = walk_schema(schema, DEFAULT_EXCLUDED, prompter)
        dependencies = choose_dependencies(schema, prompter)
        return SpringRequest(
            project_name=project_name,
            dest_dir=Path(dest_dir),
            params=dict(params),
            dependencies=dependencies,
        )

    async def scaffold_spring(self, req: SpringRequest) -> Path:
        url = build_download_url(
            self.config.initializr_url, req.project_name, req.params.items(), req.dependencies
        )
        dest_file = Path(req.dest_dir) / archive_name()
        return await self.network_runner.download(url, dest_file)

    # ── Tasks on an existing project ──────────────────────────────────

    def run_task(self, goal: str, start_dir: str | Path) -> ScaffoldExecution:
        """Run a free-form goal string against the nearest build file."""
        build_file = find_build_file(start_dir)
        if build_file is None:
            raise ValidationError(f"No pom.xml or build.gradle found from {start_dir}")

        project_dir = build_file.project_dir
        if build_file.tool == "maven":
            backend = Backend.MAVEN
            executable = resolve_build_tool(
                self.config.maven_command, self.config.maven_wrapper, project_dir
            )
            argv = [executable, "-f", str(build_file.path), *shlex.split(goal)]
        else:
            backend = Backend.GRADLE
            executable = resolve_build_tool(
                self.config.gradle_command, self.config.gradle_wrapper, project_dir
            )
            argv = [executable, "-p", str(project_dir), *shlex.split(goal)]

        execution = ScaffoldExecution(
            backend=backend, working_dir=project_dir, destination_dir=project_dir
        )

        def on_exit(status: str) -> None:
            execution.terminal_status = status
            execution.status = (
                ExecutionStatus.SUCCEEDED if is_finished(status) else ExecutionStatus.FAILED
            )

        execution.handle = self.process_runner.launch(
            project_dir, argv, on_exit, label=backend.value
        )
        return execution
