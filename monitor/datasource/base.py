"""
Base class for market data sources.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from monitor.services.client import ServiceClient, get_service_client

T = TypeVar("T", bound=BaseModel)


class BaseDataSource(ABC, Generic[T]):
    """
    Market sources go through ServiceClient and return pydantic models.
    Upstream errors degrade to placeholder models, never exceptions.
    """

    def __init__(self, client: ServiceClient | None = None):
        self.client = client or get_service_client()

    @property
    @abstractmethod
    def service_id(self) -> str: ...

    @abstractmethod
    async def fetch(self) -> list[T]: ...

    @abstractmethod
    def is_configured(self) -> bool: ...
