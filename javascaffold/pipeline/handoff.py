"""Move the user's view to a freshly generated directory."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol

import click


class DirectoryHost(Protocol):
    """Whatever is showing the user files: a terminal, an editor, a test double."""

    def open_directory(self, path: Path) -> None: ...

    def refresh_listing(self, path: Path) -> None: ...


def _list_entries(path: Path) -> list[str]:
    try:
        return sorted(p.name + ("/" if p.is_dir() else "") for p in path.iterdir())
    except OSError:
        return []


class ConsoleHost:
    """Prints the directory the user should continue in, with its entries."""

    def open_directory(self, path: Path) -> None:
        click.echo(f"[handoff] Project ready: {path}")
        for name in _list_entries(path):
            click.echo(f"  {name}")

    def refresh_listing(self, path: Path) -> None:
        entries = _list_entries(path)
        click.echo(f"[handoff] {path} ({len(entries)} entries)")


class CompletionHandoff:
    def __init__(self, host: DirectoryHost):
        self.host = host

    def fire(self, destination: Path, refresh: Path | None = None) -> None:
        """Open ``destination`` and refresh the ``refresh`` listing on the next loop turn."""
        self.host.open_directory(destination)
        if refresh is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.host.refresh_listing(refresh)
            return
        loop.call_soon(self.host.refresh_listing, refresh)
