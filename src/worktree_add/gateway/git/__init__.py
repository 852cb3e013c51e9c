"""Git gateway (ref store, remotes, and worktree registry)."""
