"""Bridge Jujutsu bookmarks to GitHub stacked pull requests."""
