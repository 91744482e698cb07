"""
Application Layer

Contains the application's use cases. This layer orchestrates the record
store and the domain's business rules.
"""
