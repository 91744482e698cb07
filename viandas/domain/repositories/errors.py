"""
Repository error contract

Concrete repositories raise a subclass of this when the record store fails.
"""


class RepositoryError(Exception):
    """A record store read or write failed"""
