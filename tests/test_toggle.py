import pytest

from barblocks.errors import BarError
from barblocks.toggle import default_shell, read_state, run_command, toggle_icon


def test_default_shell_from_environment(monkeypatch):
    monkeypatch.setenv("SHELL", "/bin/zsh")
    assert default_shell() == "/bin/zsh"


def test_default_shell_fallback(monkeypatch):
    monkeypatch.delenv("SHELL", raising=False)
    assert default_shell() == "sh"


def test_toggle_icon_defaults():
    assert toggle_icon(True) == "toggle_on"
    assert toggle_icon(False) == "toggle_off"


def test_toggle_icon_overrides():
    assert toggle_icon(True, "on", "off") == "on"
    assert toggle_icon(False, "on", "off") == "off"


@pytest.mark.asyncio
async def test_read_state_output_means_on():
    assert await read_state("sh", "echo enabled") is True


@pytest.mark.asyncio
async def test_read_state_empty_means_off():
    assert await read_state("sh", "true") is False


@pytest.mark.asyncio
async def test_read_state_whitespace_means_off():
    assert await read_state("sh", "printf '  \\n\\t'") is False


@pytest.mark.asyncio
async def test_read_state_invalid_utf8():
    with pytest.raises(BarError) as info:
        await read_state("sh", "printf '\\377'")
    assert info.value.message == "The output of command_state is invalid UTF-8"


@pytest.mark.asyncio
async def test_read_state_missing_shell():
    with pytest.raises(BarError) as info:
        await read_state("/nonexistent/shell", "true")
    assert info.value.message == "Failed to run command_state"


@pytest.mark.asyncio
async def test_run_command_success_and_failure():
    assert await run_command("sh", "true") is True
    assert await run_command("sh", "exit 3") is False


@pytest.mark.asyncio
async def test_run_command_missing_shell():
    with pytest.raises(BarError) as info:
        await run_command("/nonexistent/shell", "true")
    assert info.value.message == "Failed to run command"