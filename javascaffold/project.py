from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Checked in this order within each directory
BUILD_FILES = {
    "pom.xml": "maven",
    "build.gradle": "gradle",
    "build.gradle.kts": "gradle",
}


@dataclass
class BuildFile:
    path: Path
    tool: str  # maven | gradle

    @property
    def project_dir(self) -> Path:
        return self.path.parent


def find_build_file(start_dir: str | Path) -> BuildFile | None:
    """Walk up from start_dir and return the nearest Maven or Gradle build file."""
    current = Path(start_dir).absolute()
    for directory in (current, *current.parents):
        for name, tool in BUILD_FILES.items():
            candidate = directory / name
            if candidate.is_file():
                return BuildFile(path=candidate, tool=tool)
    return None
