"""
Integration tests for complete draw sessions.

Covers auto-mode timing, restart recovery through the file store and
resilience to storage failures.
"""

import asyncio
import json
import random

from conftest import TIME_SCALE, ready_engine, run
from tambola_caller.config.defaults import StorageParams
from tambola_caller.engine import SessionEngine
from tambola_caller.errors import ErrorKind
from tambola_caller.persistence.store import JsonFileStore, MemoryStore
from tambola_caller.state.models import SessionMode


class TestAutoModeScenarios:
    """Test the auto-draw state machine end to end."""

    def test_enable_resume_and_single_tick(self):
        """Test fresh start, enable auto mode, resume, one interval gives one draw."""
        async def scenario():
            engine = await ready_engine()
            engine.toggle_pause()
            assert engine.state.paused is False

            engine.set_auto_mode(True)
            paused_after_enable = engine.state.paused

            engine.toggle_pause()
            mode = engine.state.mode
            interval = engine.state.auto_interval_seconds * TIME_SCALE
            await asyncio.sleep(interval * 1.5)
            drawn = len(engine.state.drawn)
            await engine.close()
            return paused_after_enable, mode, drawn

        paused_after_enable, mode, drawn = run(scenario())

        assert paused_after_enable is True
        assert mode == SessionMode.AUTO_ARMED
        assert drawn == 1

    def test_pause_stops_auto_draws(self):
        """Test no draw fires after pausing returns."""
        async def scenario():
            engine = await ready_engine()
            engine.set_auto_interval(1)
            engine.set_auto_mode(True)
            engine.toggle_pause()
            await asyncio.sleep(TIME_SCALE * 2.5)
            engine.toggle_pause()
            count = len(engine.state.drawn)
            armed = engine.timer.is_armed
            await asyncio.sleep(TIME_SCALE * 3)
            await engine.close()
            return count, armed, len(engine.state.drawn)

        count, armed, later = run(scenario())

        assert count >= 1
        assert armed is False
        assert later == count

    def test_disabling_auto_mode_cancels_timer(self):
        async def scenario():
            engine = await ready_engine()
            engine.set_auto_interval(1)
            engine.set_auto_mode(True)
            engine.toggle_pause()
            engine.set_auto_mode(False)
            armed = engine.timer.is_armed
            await asyncio.sleep(TIME_SCALE * 2)
            await engine.close()
            return engine, armed

        engine, armed = run(scenario())

        assert armed is False
        assert engine.state.drawn == ()
        assert engine.state.mode == SessionMode.IDLE_MANUAL

    def test_auto_mode_runs_to_completion(self, small_params):
        """Test the timer draws the whole pool, then disarms itself."""
        async def scenario():
            engine = await ready_engine(params=small_params)
            engine.set_auto_interval(1)
            engine.set_auto_mode(True)
            engine.toggle_pause()
            await asyncio.sleep(TIME_SCALE * 7)
            armed = engine.timer.is_armed
            await engine.close()
            return engine, armed

        engine, armed = run(scenario())

        assert sorted(engine.state.drawn) == [1, 2, 3, 4, 5]
        assert engine.state.mode == SessionMode.COMPLETE
        assert armed is False

    def test_resume_when_complete_does_not_arm(self, small_params):
        store = MemoryStore({
            "session": json.dumps({"generatedNumbers": [1, 2, 3, 4, 5], "isPaused": True}),
            "settings": json.dumps({"isAutoMode": True, "autoSpeed": 1}),
        })

        async def scenario():
            engine = await ready_engine(store, params=small_params)
            engine.toggle_pause()
            armed = engine.timer.is_armed
            await engine.close()
            return armed

        assert run(scenario()) is False


class TestRestartRecovery:
    """Test persistence across engine instances using the file store."""

    def test_session_round_trip_through_files(self, tmp_path):
        """Test a restarted engine sees the identical current, drawn and paused values."""
        async def first_run():
            engine = SessionEngine(JsonFileStore(str(tmp_path)), rng=random.Random(5))
            await engine.hydrate()
            engine.toggle_pause()
            for _ in range(12):
                engine.draw()
            engine.set_auto_interval(4)
            await engine.close()
            return engine.state

        async def second_run():
            engine = SessionEngine(JsonFileStore(str(tmp_path)))
            await engine.hydrate()
            await engine.close()
            return engine.state

        before = run(first_run())
        after = run(second_run())

        assert (after.current, after.drawn, after.paused) == (before.current, before.drawn, before.paused)
        assert after.auto_interval_seconds == 4
        assert len(after.drawn) == 12

    def test_reset_survives_restart_with_settings(self, tmp_path):
        """Test reset clears the session on disk but keeps settings."""
        async def first_run():
            engine = SessionEngine(JsonFileStore(str(tmp_path)))
            await engine.hydrate()
            engine.set_auto_mode(True)
            engine.set_auto_interval(7)
            engine.set_auto_mode(False)
            engine.toggle_pause()
            engine.draw()
            await engine.session_writer.flush()
            engine.reset()
            await engine.close()

        async def second_run():
            engine = SessionEngine(JsonFileStore(str(tmp_path)))
            await engine.hydrate()
            return engine.state

        run(first_run())
        state = run(second_run())

        assert not (tmp_path / "session.json").exists()
        assert state.drawn == ()
        assert state.paused is True
        assert state.auto_interval_seconds == 7
        assert state.auto_mode is False

    def test_custom_record_keys(self, tmp_path):
        storage = StorageParams(directory=str(tmp_path), session_key="game", settings_key="prefs")

        async def scenario():
            engine = SessionEngine(JsonFileStore(storage.directory), storage=storage)
            await engine.hydrate()
            engine.toggle_pause()
            engine.set_auto_interval(3)
            await engine.close()

        run(scenario())

        assert sorted(p.name for p in tmp_path.iterdir()) == ["game.json", "prefs.json"]


class TestStorageResilience:
    """Test that storage failures never affect live behaviour."""

    def test_write_failures_keep_engine_running(self):
        """Test draws keep working while every write fails."""
        async def scenario():
            store = MemoryStore()
            engine = await ready_engine(store)
            store.fail_writes = True
            engine.toggle_pause()
            results = [engine.draw() for _ in range(10)]
            engine.set_auto_interval(9)
            await engine.close()
            return engine, store, results

        engine, store, results = run(scenario())

        assert all(r.ok for r in results)
        assert len(engine.state.drawn) == 10
        assert engine.state.auto_interval_seconds == 9
        assert store.data == {}
        assert engine.session_writer.failure_count >= 1
        assert engine.settings_writer.failure_count == 1

    def test_paused_draw_reports_kind_without_write(self):
        async def scenario():
            store = MemoryStore()
            engine = await ready_engine(store)
            result = engine.draw()
            await engine.close()
            return result, store.operations

        result, operations = run(scenario())

        assert result.error == ErrorKind.PAUSED
        assert [op for op, _ in operations if op != "get"] == []
