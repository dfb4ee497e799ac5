# Shared pytest fixtures
