"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional


class Database(ABC):
    """Abstract durable key-value store for moneysaver.

    The ledger is kept as one serialized document per key, so an
    implementation only needs to read and replace whole documents.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def get_document(self, key: str) -> Optional[str]:
        """Get the document stored under key, or None if absent."""
        pass

    @abstractmethod
    def put_document(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous document."""
        pass
