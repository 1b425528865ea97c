from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from javascaffold.pipeline.process import ExecutionHandle


class Backend(Enum):
    MAVEN = "maven"
    GRADLE = "gradle"
    SPRING = "spring"


class ExecutionStatus(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class MavenRequest:
    parent_dir: Path
    group_id: str
    artifact_id: str
    archetype_artifact_id: str = "maven-archetype-quickstart"

    @property
    def destination_dir(self) -> Path:
        return Path(self.parent_dir) / self.artifact_id


@dataclass
class GradleRequest:
    parent_dir: Path
    project_name: str
    dsl: str = "groovy"
    type: str = "java-application"
    test_framework: str = "junit-jupiter"

    @property
    def destination_dir(self) -> Path:
        return Path(self.parent_dir) / self.project_name


@dataclass
class SpringRequest:
    project_name: str
    dest_dir: Path
    params: dict[str, str] = field(default_factory=dict)
    dependencies: set[str] = field(default_factory=set)


ScaffoldRequest = Union[MavenRequest, GradleRequest, SpringRequest]


@dataclass
class ScaffoldExecution:
    """One in-flight scaffold. Owned by the flow that launched it."""

    backend: Backend
    working_dir: Path
    destination_dir: Path
    handle: ExecutionHandle | None = None
    status: ExecutionStatus = ExecutionStatus.PENDING
    terminal_status: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is ExecutionStatus.SUCCEEDED

    async def wait(self) -> ExecutionStatus:
        """Block this flow until the process callback has settled the status."""
        if self.handle is not None:
            await self.handle.wait()
        return self.status
