import asyncio
import json
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from red_alert.core import mcp_server, state


def test_mcp_server_name():
    assert mcp_server.mcp.name == "Red Alert System"


@pytest.mark.asyncio
async def test_run_tool_renders_json_with_hebrew(make_composer):
    composer = make_composer(current="")

    with patch("red_alert.core.mcp_server.get_composer", return_value=composer):
        text = await mcp_server.run_tool("get_location_info", {"location_name": "שדרות"})

    data = json.loads(text)
    assert data["status"] == "found"
    assert data["area"] == "עוטף עזה"
    assert "עוטף עזה" in text


@pytest.mark.asyncio
async def test_run_tool_reports_errors_as_json(make_composer):
    with patch("red_alert.core.mcp_server.get_composer", return_value=make_composer()):
        text = await mcp_server.run_tool("get_area_alerts", {"area_name": ""})

    data = json.loads(text)
    assert data["status"] == "error"
    assert data["error"] == "area_name is required"


@pytest.mark.asyncio
async def test_composer_is_created_once_and_closed_on_shutdown():
    fake = MagicMock()
    fake.close = AsyncMock()

    with patch.object(state.ResponseComposer, "create", return_value=fake) as create:
        state.app_state.composer = None
        assert await state.get_composer() is fake
        assert await state.get_composer() is fake
        create.assert_called_once()

        await state.shutdown()

    fake.close.assert_awaited_once()
    assert state.app_state.composer is None


@pytest.mark.asyncio
async def test_concurrent_first_calls_share_one_composer():
    fake = MagicMock()
    fake.close = AsyncMock()

    with patch.object(state.ResponseComposer, "create", return_value=fake) as create:
        state.app_state.composer = None
        composers = await asyncio.gather(*(state.get_composer() for _ in range(8)))
        await state.shutdown()

    assert all(composer is fake for composer in composers)
    create.assert_called_once()
