from __future__ import annotations

from pathlib import Path

import httpx

PROJECT_CONFIGURATION_UPDATE = "java.projectConfiguration.update"
WORKSPACE_BUILD = "java.workspace.compile"


class CommandNotifier:
    """One-way commands to the language server.

    Nothing is awaited beyond the HTTP status, and nothing is raised: with no
    URL configured every call is a no-op, and a failed send is only logged.
    """

    def __init__(self, server_url: str, timeout: float | None = None):
        self.url = f"{server_url.rstrip('/')}/commands" if server_url else ""
        self.headers = {"Content-Type": "application/json"}
        self.timeout = timeout

    async def send(self, command: str, arguments: list | None = None) -> bool:
        """Post a command. Returns whether it was delivered; never raises."""
        if not self.url:
            print(f"[notify] No language server configured, skipping '{command}'")
            return False
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.post(
                    self.url,
                    json={"command": command, "arguments": arguments or []},
                    headers=self.headers,
                    timeout=self.timeout,
                )
                resp.raise_for_status()
        except httpx.HTTPError as e:
            print(f"[notify] Failed to send '{command}': {e}")
            return False
        return True

    async def notify_build_config_changed(self, build_file: str | Path) -> bool:
        uri = Path(build_file).absolute().as_uri()
        return await self.send(PROJECT_CONFIGURATION_UPDATE, [uri])

    async def trigger_workspace_build(self) -> bool:
        return await self.send(WORKSPACE_BUILD, [True])
