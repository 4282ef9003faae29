"""Repository interface for job operations."""

from abc import ABC, abstractmethod


class JobRepo(ABC):
    """Contract for job persistence operations."""

    @abstractmethod
    def create(self, session, data):
        raise NotImplementedError

    @abstractmethod
    def find_all(self, session, filters=None):
        raise NotImplementedError

    @abstractmethod
    def get(self, session, job_id):
        raise NotImplementedError

    @abstractmethod
    def update(self, session, job_id, data):
        raise NotImplementedError

    @abstractmethod
    def remove(self, session, job_id):
        raise NotImplementedError
