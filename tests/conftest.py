import stat
from pathlib import Path

import pytest

from javascaffold.config import Config
from javascaffold.pipeline.handoff import CompletionHandoff
from javascaffold.pipeline.scaffolder import ScaffoldOrchestrator

INITIALIZR_URL = "https://start.spring.io"

METADATA = {
    "_links": {"maven-project": {"href": "https://start.spring.io/starter.zip?type=maven-project"}},
    "dependencies": {
        "type": "hierarchical-multi-select",
        "values": [
            {
                "name": "Web",
                "values": [
                    {"id": "web", "name": "Spring Web"},
                    {"id": "webflux", "name": "Spring Reactive Web"},
                ],
            },
            {
                "name": "SQL",
                "values": [
                    {"id": "jdbc", "name": "JDBC API"},
                    {"id": "data-jpa", "name": "Spring Data JPA"},
                ],
            },
        ],
    },
    "type": {
        "type": "action",
        "default": "maven-project",
        "values": [
            {"id": "maven-project", "name": "Maven Project", "action": "/starter.zip"},
            {"id": "gradle-project", "name": "Gradle Project", "action": "/starter.zip"},
        ],
    },
    "packaging": {
        "type": "single-select",
        "default": "jar",
        "values": [{"id": "jar", "name": "Jar"}, {"id": "war", "name": "War"}],
    },
    "javaVersion": {
        "type": "single-select",
        "default": "17",
        "values": [{"id": "21", "name": "21"}, {"id": "17", "name": "17"}],
    },
    "groupId": {"type": "text", "default": "com.example"},
    "artifactId": {"type": "text", "default": "demo"},
    "name": {"type": "text", "default": "demo"},
    "description": {"type": "text", "default": "Demo project for Spring Boot"},
}


class RecordingHost:
    """DirectoryHost that remembers what it was asked to show."""

    def __init__(self):
        self.opened: list[Path] = []
        self.refreshed: list[Path] = []

    def open_directory(self, path):
        self.opened.append(Path(path))

    def refresh_listing(self, path):
        self.refreshed.append(Path(path))


class ScriptedPrompter:
    """Prompter answering from a dict; missing keys take the offered default."""

    def __init__(self, answers=None, dependencies=None):
        self.answers = answers or {}
        self.dependencies = dependencies
        self.asked: list[str] = []

    def select(self, key, options, default):
        self.asked.append(key)
        return self.answers.get(key, default)

    def text(self, key, default):
        self.asked.append(key)
        return self.answers.get(key, default)

    def multi_select(self, key, options):
        self.asked.append(key)
        return self.dependencies


def write_script(path: Path, body: str, executable: bool = True) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    if executable:
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    else:
        path.chmod(0o644)
    return path


@pytest.fixture
def config():
    return Config(
        initializr_url=INITIALIZR_URL,
        maven_command="java-scaffold-missing-mvn",
        gradle_command="java-scaffold-missing-gradle",
    )


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def handoff(host):
    return CompletionHandoff(host)


@pytest.fixture
def orchestrator(config, host):
    return ScaffoldOrchestrator(config, host=host)
