"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case: parse a request model, call domain services, shape the response."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
