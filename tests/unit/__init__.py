"""
Unit tests package.

Contains isolated tests for entities, DTOs, services (with mocked
repositories) and repositories (with an in-memory SQLite store).
"""
