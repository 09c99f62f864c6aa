"""Core infrastructure for the mentor assignment service.

Configuration, logging, the async database manager and FastAPI dependency
helpers used by the application entrypoint.
"""
