"""Core: configuration, constants, lifespan, exception handlers, rate limiting."""
