"""
Infrastructure Layer

Contains all external dependencies and implementations:
- Record store (SQLAlchemy models, engine and repositories)
- Staff authentication
- Shared collection caches
- Configuration management
- Logging infrastructure
"""
