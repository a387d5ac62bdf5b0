"""Tests for the auto-draw timer."""

import asyncio

from conftest import run
from tambola_caller.state.timer import AutoDrawTimer

SCALE = 0.01  # one interval unit = 10ms


class TestAutoDrawTimer:
    """Test arming, ticking and cancellation."""

    def test_ticks_repeatedly_until_disarmed(self):
        """Test the callback fires once per interval while armed."""
        async def scenario():
            timer = AutoDrawTimer(time_scale=SCALE)
            ticks = []
            timer.arm(2, lambda: ticks.append(1) or True)

            await asyncio.sleep(0.07)
            timer.disarm()
            count = len(ticks)
            await asyncio.sleep(0.05)
            return count, len(ticks), timer.is_armed

        count, later_count, armed = run(scenario())

        assert count >= 2
        assert later_count == count
        assert armed is False

    def test_no_tick_after_disarm(self):
        """Test disarming before the first interval prevents any tick."""
        async def scenario():
            timer = AutoDrawTimer(time_scale=SCALE)
            ticks = []
            timer.arm(1, lambda: ticks.append(1) or True)
            timer.disarm()
            await asyncio.sleep(0.05)
            return ticks

        assert run(scenario()) == []

    def test_rearm_replaces_existing_task(self):
        """Test arming twice leaves a single live timer."""
        async def scenario():
            timer = AutoDrawTimer(time_scale=SCALE)
            first, second = [], []
            timer.arm(1, lambda: first.append(1) or True)
            timer.arm(3, lambda: second.append(1) or True)

            assert timer.interval == 3
            await asyncio.sleep(0.045)
            timer.disarm()
            return first, second

        first, second = run(scenario())

        assert first == []
        assert len(second) == 1

    def test_callback_returning_false_stops_timer(self):
        """Test a tick that returns False ends the task."""
        async def scenario():
            timer = AutoDrawTimer(time_scale=SCALE)
            ticks = []
            timer.arm(1, lambda: ticks.append(1) and False)
            await asyncio.sleep(0.05)
            return ticks, timer.is_armed, timer.interval

        ticks, armed, interval = run(scenario())

        assert ticks == [1]
        assert armed is False
        assert interval is None

    def test_disarm_is_safe_when_idle(self):
        timer = AutoDrawTimer()
        timer.disarm()
        timer.disarm()
        assert timer.is_armed is False
