# tests/test_indicator.py
import asyncio
import io

import pytest

from gaia_hedera_agent.indicator import busy_indicator


def _run(coro):
    return asyncio.run(coro)


def test_spinner_draws_while_busy_and_stops_on_exit():
    stream = io.StringIO()

    async def scenario():
        async with busy_indicator("Thinking...", stream=stream, interval=0.01):
            await asyncio.sleep(0.05)
        drawn = stream.getvalue()
        await asyncio.sleep(0.05)  # a leaked task would keep writing
        return drawn, stream.getvalue(), len(asyncio.all_tasks())

    drawn, later, tasks = _run(scenario())
    assert "Thinking... |" in drawn
    assert "Thinking... /" in drawn
    assert later == drawn
    assert tasks == 1  # only the scenario itself
    assert drawn.endswith("\r")


def test_spinner_is_cancelled_when_body_raises():
    stream = io.StringIO()

    async def scenario():
        with pytest.raises(RuntimeError):
            async with busy_indicator("Thinking...", stream=stream, interval=0.01):
                await asyncio.sleep(0.02)
                raise RuntimeError("network down")
        drawn = stream.getvalue()
        await asyncio.sleep(0.05)
        return drawn, stream.getvalue(), len(asyncio.all_tasks())

    drawn, later, tasks = _run(scenario())
    assert later == drawn
    assert tasks == 1
