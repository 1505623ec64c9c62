"""Template description writer: deterministic copy, no network access."""

from catalogue.descriptions.writer_port import DescriptionWriterPort
from shared.errors import DescriptionUnavailable


class TemplateDescriptionWriter(DescriptionWriterPort):
    """Fills a fixed template. Used in development and tests.

    Can be configured to fail, which simulates an unavailable writer.
    """

    def __init__(self) -> None:
        self.requests: list[dict] = []
        self.should_succeed: bool = True
        self.failure_reason: str = "Description writer unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Description writer unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    async def write(self, name: str, category: str, keywords: list[str] | None = None) -> str:
        self.requests.append({"name": name, "category": category, "keywords": list(keywords or [])})
        if not self.should_succeed:
            raise DescriptionUnavailable(self.failure_reason)

        description = f"{name} is a dependable pick from our {category} range."
        if keywords:
            description += f" Highlights: {', '.join(keywords)}."
        return description + " Delivered to your door with cash on delivery."

    def reset(self) -> None:
        self.requests.clear()
        self.should_succeed = True
        self.failure_reason = "Description writer unavailable"
