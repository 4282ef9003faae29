"""Repository interface for user accounts."""

from abc import ABC, abstractmethod


class UserRepo(ABC):
    """Contract for user persistence and credential checks."""

    @abstractmethod
    def authenticate(self, session, username, password):
        """Return the user when the password matches."""
        raise NotImplementedError

    @abstractmethod
    def register(self, session, data):
        """Create a user with a hashed password."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, session):
        raise NotImplementedError

    @abstractmethod
    def get(self, session, username):
        raise NotImplementedError

    @abstractmethod
    def update(self, session, username, data):
        raise NotImplementedError

    @abstractmethod
    def remove(self, session, username):
        raise NotImplementedError
