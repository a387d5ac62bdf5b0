#!/usr/bin/env python3
"""
Basic Usage Example - Tambola Caller Session Engine

This script demonstrates the basic usage of the session engine with a
temporary file store. It shows how to:
- Hydrate an engine from storage
- Draw numbers manually
- Run auto mode for a few ticks
- Reset the session and restart from disk

Run: python examples/basic_usage.py
"""

import asyncio
import tempfile

from tambola_caller.engine import SessionEngine
from tambola_caller.logging import configure_logging
from tambola_caller.persistence.store import JsonFileStore
from tambola_caller.state.models import SessionView


def print_view(view: SessionView) -> None:
    """Print the render-ready view the way a UI would show it."""
    current = view.current if view.current is not None else "-"
    flags = []
    if view.is_paused:
        flags.append("paused")
    if view.is_auto_mode:
        flags.append(f"auto {view.auto_interval_seconds}s")
    if view.is_complete:
        flags.append("complete")
    print(f"  current={current:>3}  drawn={view.drawn_count:>3}  "
          f"remaining={view.remaining_count:>3}  [{', '.join(flags)}]")


async def main() -> None:
    configure_logging(level="WARNING")
    data_dir = tempfile.mkdtemp(prefix="tambola_")

    print("🎱 Manual draws")
    engine = SessionEngine(JsonFileStore(data_dir))
    await engine.hydrate()
    unsubscribe = engine.subscribe(print_view)

    engine.toggle_pause()
    for _ in range(5):
        engine.manual_draw()

    print("\n⏱️  Auto mode (1s interval, 3 ticks)")
    engine.set_auto_interval(1)
    engine.set_auto_mode(True)
    engine.toggle_pause()
    await asyncio.sleep(3.2)
    engine.toggle_pause()

    print("\n📜 History (newest first)")
    for order, number in engine.history():
        print(f"  #{order:<3} {number}")

    unsubscribe()
    await engine.close()

    print("\n🔄 Restart from disk")
    restarted = SessionEngine(JsonFileStore(data_dir))
    print_view(await restarted.hydrate())

    restarted.reset()
    print_view(restarted.view)
    await restarted.close()

    print(f"\nRecords kept in {data_dir}")


if __name__ == "__main__":
    asyncio.run(main())
