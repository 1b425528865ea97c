"""Download a generated project archive from the remote generator."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import BinaryIO

import httpx

from javascaffold.errors import NetworkError
from javascaffold.pipeline.handoff import CompletionHandoff


def archive_name(now: datetime | None = None) -> str:
    """Timestamp file name for a downloaded archive."""
    return (now or datetime.now()).strftime("%Y%m%d%H%M%S") + ".zip"


def _claim(dest: Path) -> tuple[Path, BinaryIO]:
    """Open the first free name among ``dest``, ``stem-1``, ``stem-2``... exclusively."""
    candidate, n = dest, 0
    while True:
        try:
            return candidate, open(candidate, "xb")
        except FileExistsError:
            n += 1
            candidate = dest.with_name(f"{dest.stem}-{n}{dest.suffix}")


class NetworkScaffoldRunner:
    def __init__(self, handoff: CompletionHandoff, timeout: float | None = None):
        self.handoff = handoff
        self.timeout = timeout

    async def download(self, url: str, dest_file: str | Path) -> Path:
        """Stream ``url`` into ``dest_file`` and hand off to its parent directory.

        The archive is left as-is; nothing is extracted. An existing file is
        never overwritten: the archive takes the next free ``-N`` name and the
        path actually written is returned. A failed transfer raises
        NetworkError, removes the partial file, and is not retried.
        """
        dest = Path(dest_file)
        dest.parent.mkdir(parents=True, exist_ok=True)
        print(f"[download] GET {url}")

        claimed: Path | None = None
        try:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                async with client.stream("GET", url, timeout=self.timeout) as resp:
                    resp.raise_for_status()
                    claimed, f = _claim(dest)
                    with f:
                        async for chunk in resp.aiter_bytes():
                            f.write(chunk)
        except httpx.HTTPError as e:
            if claimed is not None:
                claimed.unlink(missing_ok=True)
            raise NetworkError(f"Failed to download {url}: {e}") from e

        print(f"[download] Saved {claimed} ({claimed.stat().st_size} bytes)")
        self.handoff.fire(claimed.parent)
        return claimed
