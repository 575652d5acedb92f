"""Scanner strategies for specific external tools."""
