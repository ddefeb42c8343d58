"""SQLAlchemy ORM models for the sql document store."""
