"""UI framework adapters."""
