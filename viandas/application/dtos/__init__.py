"""
Application DTOs
"""
