"""Terminal UI, CLI entry point and path resolution."""
