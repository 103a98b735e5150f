"""Persistence: engine, session dependencies, ORM models, and repositories."""
