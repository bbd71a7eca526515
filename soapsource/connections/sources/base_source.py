"""Abstract data-source contract the host application talks to."""

from abc import ABC, abstractmethod
from typing import Any

from .data_contract import QueryResult


class BaseDataSource(ABC):
    description = "DataSource"

    @abstractmethod
    def connect(self) -> bool:
        """Open the session with the remote source and report whether it succeeded."""
        pass

    @abstractmethod
    def query(self, method: str, payload: Any = None, command: str | None = None) -> QueryResult:
        """Run one remote call and return it in the standardized result format."""
        pass

    @abstractmethod
    def list_sources(self) -> list[str]:
        """List the remote operations the source exposes."""
        pass

    @abstractmethod
    def close(self) -> bool:
        """Release the remote session."""
        pass
