import json
from unittest.mock import AsyncMock, patch

import pytest

from barblocks.errors import BarError
from barblocks.speedtest import SpeedtestResult, run_speedtest


class _FakeProcess:
    def __init__(self, stdout):
        self._stdout = stdout

    async def communicate(self):
        return self._stdout, b""


def test_from_json_reads_fields():
    text = json.dumps({"download": 1000.5, "upload": 250, "ping": 12.0, "server": {}})
    result = SpeedtestResult.from_json(text)
    assert result == SpeedtestResult(download=1000.5, upload=250.0, ping=12.0)


def test_ping_seconds_scales_milliseconds():
    result = SpeedtestResult(download=0.0, upload=0.0, ping=250.0)
    assert result.ping_seconds() == pytest.approx(0.25)


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"download": 1.0, "upload": 2.0}),
        json.dumps({"download": "fast", "upload": 2.0, "ping": 3.0}),
        json.dumps({"download": True, "upload": 2.0, "ping": 3.0}),
    ],
)
def test_from_json_rejects_bad_input(text):
    with pytest.raises(BarError) as info:
        SpeedtestResult.from_json(text)
    assert info.value.message == "'speedtest-cli' produced wrong JSON"


@pytest.mark.asyncio
async def test_run_speedtest_parses_process_output():
    payload = json.dumps({"download": 10.0, "upload": 5.0, "ping": 20.0}).encode()
    fake = AsyncMock(return_value=_FakeProcess(payload))
    with patch("asyncio.create_subprocess_exec", new=fake):
        result = await run_speedtest()
    assert result.download == 10.0
    assert result.upload == 5.0
    assert fake.call_args.args[:2] == ("speedtest-cli", "--json")


@pytest.mark.asyncio
async def test_run_speedtest_reports_missing_program():
    fake = AsyncMock(side_effect=FileNotFoundError("speedtest-cli"))
    with patch("asyncio.create_subprocess_exec", new=fake):
        with pytest.raises(BarError) as info:
            await run_speedtest()
    assert info.value.message == "failed to run 'speedtest-cli'"


@pytest.mark.asyncio
async def test_run_speedtest_rejects_non_utf8():
    fake = AsyncMock(return_value=_FakeProcess(b"\xff\xfe"))
    with patch("asyncio.create_subprocess_exec", new=fake):
        with pytest.raises(BarError) as info:
            await run_speedtest()
    assert info.value.message == "'speedtest-cli' produced non-UTF8 output"