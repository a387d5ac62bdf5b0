"""
Draw session state machine module.

Holds the immutable session snapshot, the pure transitions between
Idle/Manual, Auto-Armed, Auto-Paused and Complete, and the cancellable
auto-draw timer.
"""
