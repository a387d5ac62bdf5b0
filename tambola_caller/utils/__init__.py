"""
Utility functions module.

Shared numeric helpers used by both the record codecs and the session
state transitions, so stored and live settings obey the same bounds.
"""
