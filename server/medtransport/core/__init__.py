"""Configuration, dependencies, errors, middleware and observability."""
