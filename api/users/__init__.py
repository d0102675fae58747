"""User resource: persistence, handlers and routes."""
