"""Persistence: SQLAlchemy engine, staff profile model and role provider."""
