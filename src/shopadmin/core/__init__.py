"""Core application infrastructure: config, exceptions, middleware, events."""
