"""Interval <-> goal association persistence and schemas."""
