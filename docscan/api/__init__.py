"""API package - HTTP transport for image tasks."""
