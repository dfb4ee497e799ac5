"""
Integration tests package.

Contains tests that run the services, controllers and management
commands against a real SQLite store.
"""
