from javascaffold.config import Config


def test_defaults_without_environment(monkeypatch):
    for name in ("INITIALIZR_URL", "MAVEN_COMMAND", "LANGUAGE_SERVER_URL", "DOWNLOAD_DIR"):
        monkeypatch.delenv(name, raising=False)

    config = Config.from_env()

    assert config.initializr_url == "https://start.spring.io"
    assert config.initializr_accept == "application/vnd.initializr.v2.1+json"
    assert config.maven_command == "mvn"
    assert config.gradle_wrapper == "gradlew"
    assert config.language_server_url == ""


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("INITIALIZR_URL", "https://initializr.internal/")
    monkeypatch.setenv("MAVEN_COMMAND", "/opt/maven/bin/mvn")
    monkeypatch.setenv("LANGUAGE_SERVER_URL", "http://localhost:5007")

    config = Config.from_env()

    assert config.initializr_url == "https://initializr.internal"
    assert config.maven_command == "/opt/maven/bin/mvn"
    assert config.language_server_url == "http://localhost:5007"
