"""Compose build-tool command lines and the generator download URL."""
from __future__ import annotations

import shlex
from collections.abc import Iterable
from urllib.parse import urlencode

from javascaffold.errors import ValidationError
from javascaffold.pipeline.models import GradleRequest, MavenRequest

GRADLE_DSLS = ("groovy", "kotlin")
GRADLE_TYPES = ("java-application", "java-library", "java-gradle-plugin", "basic")
GRADLE_TEST_FRAMEWORKS = ("junit-jupiter", "spock", "testng")


def build_maven_command(executable: str, req: MavenRequest) -> list[str]:
    """archetype:generate in batch mode.

    Values go in as separate argv entries and are never passed through a
    shell, so each one reaches Maven as a single argument.
    """
    return [
        executable,
        "archetype:generate",
        f"-DgroupId={req.group_id}",
        f"-DartifactId={req.artifact_id}",
        f"-DarchetypeArtifactId={req.archetype_artifact_id}",
        "-DinteractiveMode=false",
    ]


def _check_choice(flag: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        raise ValidationError(
            f"Invalid value for {flag}: '{value}' (expected one of: {', '.join(allowed)})"
        )


def build_gradle_command(executable: str, req: GradleRequest) -> list[str]:
    _check_choice("--type", req.type, GRADLE_TYPES)
    _check_choice("--test-framework", req.test_framework, GRADLE_TEST_FRAMEWORKS)
    _check_choice("--dsl", req.dsl, GRADLE_DSLS)
    return [
        executable,
        "init",
        "--type", req.type,
        "--test-framework", req.test_framework,
        "--dsl", req.dsl,
    ]


def build_download_url(
    base_url: str,
    name: str,
    params: Iterable[tuple[str, str]],
    dependencies: Iterable[str],
) -> str:
    """``<base>/starter.zip?name=..&key=value..&dependencies=a,b``"""
    query = [("name", name)]
    query.extend((k, v) for k, v in params if k != "name")
    query.append(("dependencies", ",".join(sorted(dependencies))))
    return f"{base_url.rstrip('/')}/starter.zip?{urlencode(query, safe=',')}"


def describe_command(argv: list[str]) -> str:
    """Shell-quoted rendering for the log."""
    return shlex.join(argv)
