"""Persistence layer: ORM models, sessions and schema migrations."""
