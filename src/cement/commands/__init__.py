"""Click plumbing for the cement CLI: command class and shared context."""
