"""Interval resource: persistence, handlers and routes."""
