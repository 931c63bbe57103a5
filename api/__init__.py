"""API package - HTTP layer (routers, dependencies, middleware)."""
