from javascaffold.project import find_build_file


def test_finds_pom_in_start_dir(tmp_path):
    (tmp_path / "pom.xml").write_text("<project/>")

    found = find_build_file(tmp_path)

    assert found.path == tmp_path / "pom.xml"
    assert found.tool == "maven"
    assert found.project_dir == tmp_path


def test_walks_up_to_nearest_gradle_build(tmp_path):
    (tmp_path / "build.gradle.kts").write_text("")
    nested = tmp_path / "app" / "src"
    nested.mkdir(parents=True)

    found = find_build_file(nested)

    assert found.tool == "gradle"
    assert found.project_dir == tmp_path


def test_nearest_build_file_wins(tmp_path):
    (tmp_path / "pom.xml").write_text("<project/>")
    module = tmp_path / "module"
    module.mkdir()
    (module / "build.gradle").write_text("")

    assert find_build_file(module).path == module / "build.gradle"
