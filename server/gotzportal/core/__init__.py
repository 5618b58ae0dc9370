"""Configuration, database, errors, auth dependencies and observability."""
