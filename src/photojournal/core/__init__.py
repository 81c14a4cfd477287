"""Shared infrastructure: config, errors, events, storage and logging."""
