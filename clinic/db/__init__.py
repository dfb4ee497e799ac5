from .session import Base, Database, build_engine, get_database

__all__ = ["Base", "Database", "build_engine", "get_database"]
