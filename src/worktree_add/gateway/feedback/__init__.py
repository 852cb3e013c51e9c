"""User-facing status output with verbosity and dry-run awareness."""
