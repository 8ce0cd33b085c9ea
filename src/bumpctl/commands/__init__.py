"""Click plumbing shared by the CLI: command class and application context."""
