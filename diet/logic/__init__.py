"""Core business logic layer.

Subpackages:
- codec: diet plan text <-> structured plan conversion
- scheduling: booking slots, occupancy and the booking write path

Both are plain functions over plain values; persistence is passed in.
"""
__all__ = ["codec", "scheduling"]
