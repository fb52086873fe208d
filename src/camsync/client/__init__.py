"""Client module - Camera API, sync engine and CLI."""
