import json

import httpx
import pytest
import respx

from javascaffold.notifier import PROJECT_CONFIGURATION_UPDATE, WORKSPACE_BUILD, CommandNotifier

SERVER = "http://localhost:5007"


@pytest.mark.asyncio
async def test_build_config_changed_sends_file_uri(tmp_path):
    pom = tmp_path / "pom.xml"
    pom.write_text("<project/>")
    with respx.mock:
        route = respx.post(f"{SERVER}/commands").mock(return_value=httpx.Response(204))

        assert await CommandNotifier(SERVER).notify_build_config_changed(pom)

    body = json.loads(route.calls.last.request.content)
    assert body == {"command": PROJECT_CONFIGURATION_UPDATE, "arguments": [pom.as_uri()]}


@pytest.mark.asyncio
async def test_workspace_build_command():
    with respx.mock:
        route = respx.post(f"{SERVER}/commands").mock(return_value=httpx.Response(200))

        assert await CommandNotifier(SERVER + "/").trigger_workspace_build()

    assert json.loads(route.calls.last.request.content)["command"] == WORKSPACE_BUILD


@pytest.mark.asyncio
async def test_unavailable_server_is_a_silent_no_op(capsys):
    with respx.mock:
        respx.post(f"{SERVER}/commands").mock(side_effect=httpx.ConnectError("refused"))

        assert await CommandNotifier(SERVER).trigger_workspace_build() is False

    assert "Failed to send" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_no_server_configured_sends_nothing():
    with respx.mock(assert_all_called=False):
        route = respx.post(f"{SERVER}/commands")

        assert await CommandNotifier("").trigger_workspace_build() is False

    assert not route.called
