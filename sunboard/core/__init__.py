"""Core domain: database, models, schemas, repositories, services."""
