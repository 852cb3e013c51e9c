"""Console gateway (TTY detection and confirmation prompts)."""
