"""Goal resource: persistence, handlers and routes."""
