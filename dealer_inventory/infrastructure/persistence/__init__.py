"""Persistence: async SQLAlchemy engine, models, repositories and the query compiler."""
