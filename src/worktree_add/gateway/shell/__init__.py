"""Shell gateway (configured post-create commands)."""
