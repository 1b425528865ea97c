import asyncio
from pathlib import Path

import pytest

from javascaffold.pipeline.handoff import CompletionHandoff, ConsoleHost


@pytest.mark.asyncio
async def test_refresh_is_deferred_to_the_next_loop_turn(handoff, host):
    handoff.fire(Path("/p/demo"), refresh=Path("/p"))

    assert host.opened == [Path("/p/demo")]
    assert host.refreshed == []

    await asyncio.sleep(0)

    assert host.refreshed == [Path("/p")]


def test_without_a_loop_refresh_happens_immediately(handoff, host):
    handoff.fire(Path("/p/demo"), refresh=Path("/p"))

    assert host.refreshed == [Path("/p")]


def test_console_host_lists_entries(tmp_path, capsys):
    (tmp_path / "pom.xml").write_text("<project/>")
    (tmp_path / "src").mkdir()

    CompletionHandoff(ConsoleHost()).fire(tmp_path)

    out = capsys.readouterr().out
    assert f"Project ready: {tmp_path}" in out
    assert "  pom.xml" in out
    assert "  src/" in out
