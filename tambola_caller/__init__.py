"""
Tambola Caller - Unique Number Draw Session Engine

Draws unique random numbers from a fixed pool (1-100 by default) for
Tambola/Housie games, tracks the draw history, drives optional timed
auto-draws, and persists progress and settings across restarts.
"""

__version__ = "0.1.0"
__author__ = "Tambola Caller Team"
