"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks every feature uses (DB wiring, settings,
logging, error types, query building, response envelopes). Keep entity SQL
and handler logic in the corresponding feature package (e.g. `intervals/`).
"""
