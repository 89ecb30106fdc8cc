"""Shared utilities: configuration, exceptions, logging."""
