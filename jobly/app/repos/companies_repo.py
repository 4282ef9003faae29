"""Repository interface for company operations."""

from abc import ABC, abstractmethod


class CompanyRepo(ABC):
    """Contract for company persistence operations."""

    @abstractmethod
    def create(self, session, data):
        """Insert a company and return it."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, session, filters=None):
        """Return companies matching the optional filters."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session, handle):
        """Return one company together with its jobs."""
        raise NotImplementedError

    @abstractmethod
    def update(self, session, handle, data):
        """Apply a partial update and return the company."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, session, handle):
        """Delete a company and its jobs."""
        raise NotImplementedError
