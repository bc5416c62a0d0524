"""Infrastructure layer - HTTP transport, config loading."""
