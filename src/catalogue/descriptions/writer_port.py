"""Description writer port: drafts product copy for the seller form."""

from abc import ABC, abstractmethod


class DescriptionWriterPort(ABC):
    """Abstract interface for product description writers."""

    @abstractmethod
    async def write(self, name: str, category: str, keywords: list[str] | None = None) -> str:
        """Draft a short marketing description for a product."""
