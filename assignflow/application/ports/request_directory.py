"""Port interface for looking up the business requests assignments refer to."""

from abc import ABC, abstractmethod

from assignflow.domain.value_objects.enums import RequestType


class RequestDirectory(ABC):
    @abstractmethod
    async def exists(self, request_type: RequestType, request_id: str) -> bool:
        """Return True if the quote / order / import ... with this id exists."""
        ...
