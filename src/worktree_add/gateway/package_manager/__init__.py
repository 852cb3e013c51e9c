"""Package manager gateway (JavaScript toolchains in the new worktree)."""
