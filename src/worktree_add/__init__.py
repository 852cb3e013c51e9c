"""Create or reuse a git worktree for a branch as a sibling of the current checkout."""
