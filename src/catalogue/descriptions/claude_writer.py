"""Claude description writer: drafts product copy with the Anthropic API."""

import asyncio

import anthropic

from catalogue.descriptions.writer_port import DescriptionWriterPort
from shared.errors import DescriptionUnavailable
from shared.utils.logging import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You write product descriptions for an online electronics store. "
    "Reply with a single paragraph of plain text, at most 80 words, "
    "with no headings, lists or markdown."
)


class ClaudeDescriptionWriter(DescriptionWriterPort):
    def __init__(self, api_key: str, model: str, max_tokens: int = 300) -> None:
        self.client = anthropic.Anthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    def _prompt(self, name: str, category: str, keywords: list[str] | None) -> str:
        prompt = f"Product: {name}\nCategory: {category}"
        if keywords:
            prompt += f"\nMention: {', '.join(keywords)}"
        return prompt

    def _create(self, prompt: str):
        return self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )

    async def write(self, name: str, category: str, keywords: list[str] | None = None) -> str:
        try:
            response = await asyncio.to_thread(self._create, self._prompt(name, category, keywords))
        except anthropic.APIError as exc:
            logger.error("Description request failed", product_name=name, model=self.model, error=str(exc))
            raise DescriptionUnavailable("Claude request failed", cause=exc) from exc

        text = "".join(block.text for block in response.content if block.type == "text").strip()
        if not text:
            raise DescriptionUnavailable("Claude returned no text")

        logger.info("Description drafted", product_name=name, model=self.model, length=len(text))
        return text
