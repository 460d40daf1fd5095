"""Configuration, logging, database and security helpers."""
