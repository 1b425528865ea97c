from __future__ import annotations

import os
from pydantic import BaseModel


class Config(BaseModel):
    """Scaffolder configuration — all values come from environment variables."""

    # Remote project generator
    initializr_url: str = "https://start.spring.io"
    initializr_accept: str = "application/vnd.initializr.v2.1+json"

    # Build tools (global command, wrapper script name)
    maven_command: str = "mvn"
    maven_wrapper: str = "mvnw"
    gradle_command: str = "gradle"
    gradle_wrapper: str = "gradlew"

    # Language server command endpoint (notifications disabled if empty)
    language_server_url: str = ""

    # Where downloaded archives land when no directory is given
    download_dir: str = "."

    @classmethod
    def from_env(cls) -> Config:
        """Load config from environment variables."""
        return cls(
            initializr_url=os.environ.get("INITIALIZR_URL", "https://start.spring.io").rstrip("/"),
            initializr_accept=os.environ.get(
                "INITIALIZR_ACCEPT", "application/vnd.initializr.v2.1+json"
            ),
            maven_command=os.environ.get("MAVEN_COMMAND", "mvn"),
            maven_wrapper=os.environ.get("MAVEN_WRAPPER", "mvnw"),
            gradle_command=os.environ.get("GRADLE_COMMAND", "gradle"),
            gradle_wrapper=os.environ.get("GRADLE_WRAPPER", "gradlew"),
            language_server_url=os.environ.get("LANGUAGE_SERVER_URL", ""),
            download_dir=os.environ.get("DOWNLOAD_DIR", "."),
        )
