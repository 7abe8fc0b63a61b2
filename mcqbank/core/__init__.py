"""Core infrastructure: configuration, database, logging, seeders."""
