"""Database package: declarative base, engine, sessions and schema setup."""
