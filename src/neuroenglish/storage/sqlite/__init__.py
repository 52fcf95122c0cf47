"""SQLite helpers for the phrase database: connections, schema and row access."""

__all__: list[str] = []
