"""Application layer: query parsing, date resolution and lookup orchestration."""
