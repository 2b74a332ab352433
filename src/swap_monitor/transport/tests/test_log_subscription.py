"""
Tests for LogSubscription stream semantics.
"""

from unittest.mock import AsyncMock

import pytest

from swap_monitor.transport import LogSubscription


def make_subscription(**kwargs):
    return LogSubscription("0x1", "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640", ["0xc420"], **kwargs)


class TestLogSubscription:
    """Test ordered delivery and termination."""

    @pytest.mark.asyncio
    async def test_delivers_in_push_order(self):
        subscription = make_subscription()
        for i in range(5):
            subscription.push({"logIndex": i})
        subscription.end()

        received = [log["logIndex"] async for log in subscription]

        assert received == [0, 1, 2, 3, 4]
        assert subscription.finished is True

    @pytest.mark.asyncio
    async def test_not_restartable(self):
        subscription = make_subscription()
        subscription.push({"logIndex": 0})
        subscription.end()

        first = [log async for log in subscription]
        second = [log async for log in subscription]

        assert len(first) == 1
        assert second == []

    @pytest.mark.asyncio
    async def test_end_with_error_raises_after_pending_logs(self):
        subscription = make_subscription()
        subscription.push({"logIndex": 0})
        subscription.end(ConnectionError("dropped"))

        assert (await subscription.__anext__()) == {"logIndex": 0}
        with pytest.raises(ConnectionError):
            await subscription.__anext__()
        with pytest.raises(StopAsyncIteration):
            await subscription.__anext__()

    @pytest.mark.asyncio
    async def test_close_runs_once(self):
        on_close = AsyncMock()
        subscription = make_subscription(on_close=on_close)

        await subscription.close()
        await subscription.close()

        on_close.assert_awaited_once_with(subscription)

    def test_repr(self):
        assert "id=0x1" in repr(make_subscription())
