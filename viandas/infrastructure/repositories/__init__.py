"""
SQLAlchemy repository implementations
"""
