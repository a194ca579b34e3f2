"""Exceptions raised by the quota engine and its collaborators."""


class MaxViewsError(Exception):
    """Base class for quota engine errors."""


class DataAccessError(MaxViewsError):
    """A collaborator (log reader, override store, catalog) could not be queried."""
