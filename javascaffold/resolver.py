"""Pick the build-tool executable to invoke: project wrapper first, global tool second."""
from __future__ import annotations

import os
from pathlib import Path


def resolve_build_tool(command: str, wrapper_name: str, wrapper_dir: str | Path) -> str:
    """Return the absolute wrapper path if usable, else ``command`` for PATH lookup.

    The wrapper must both exist as a file and be executable; a wrapper that
    fails the executable check counts as absent.
    """
    wrapper = Path(wrapper_dir) / wrapper_name
    if not wrapper.is_file():
        return command
    if not os.access(wrapper, os.X_OK):
        print(f"[resolver] {wrapper} is not executable, falling back to '{command}'")
        return command
    return os.path.abspath(wrapper)
