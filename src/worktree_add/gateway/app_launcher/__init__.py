"""App launcher gateway (open the new worktree in editors/terminals)."""
