import os

from javascaffold.resolver import resolve_build_tool

from conftest import write_script


def test_returns_wrapper_path_when_present_and_executable(tmp_path):
    write_script(tmp_path / "mvnw", "exit 0\n")

    resolved = resolve_build_tool("mvn", "mvnw", tmp_path)

    assert resolved == os.path.abspath(tmp_path / "mvnw")
    assert os.path.isabs(resolved)


def test_returns_command_unchanged_when_wrapper_missing(tmp_path):
    assert resolve_build_tool("mvn", "mvnw", tmp_path) == "mvn"


def test_non_executable_wrapper_is_treated_as_absent(tmp_path):
    write_script(tmp_path / "gradlew", "exit 0\n", executable=False)

    assert resolve_build_tool("gradle", "gradlew", tmp_path) == "gradle"


def test_directory_named_like_wrapper_is_not_a_wrapper(tmp_path):
    (tmp_path / "mvnw").mkdir()

    assert resolve_build_tool("mvn", "mvnw", tmp_path) == "mvn"


def test_missing_wrapper_dir_falls_back(tmp_path):
    assert resolve_build_tool("mvn", "mvnw", tmp_path / "nope") == "mvn"
