# Core package initialization
# Shared configuration, logging and error types

from . import config, exceptions

__all__ = [
    "config",
    "exceptions",
]
