"""Branch synchronization and worktree provisioning engine."""
