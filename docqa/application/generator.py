"""
Gemini answer generator.

Sends the assembled prompt to gemini-2.5-flash-lite through
ChatGoogleGenerativeAI and returns the completion text. The client makes a
single attempt (max_retries=1 is one request in langchain-google-genai) bounded
by its request timeout; failures surface to the caller as ProviderError.

Dependencies: langchain-google-genai, langchain-core
System role: Answer generation adapter
"""

import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from docqa.core.exceptions import ProviderError

logger = logging.getLogger(__name__)


def _message_text(content) -> str:
    """Flatten AIMessage content, which may be a list of text parts."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GeminiGenerator:
    """Gemini chat model wrapper producing grounded answers."""

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        model: str = "gemini-2.5-flash-lite",
        temperature: float = 0.2,
        timeout_seconds: float = 60.0,
    ) -> None:
        self._llm = llm or ChatGoogleGenerativeAI(
            model=model,
            temperature=temperature,
            timeout=timeout_seconds,
            max_retries=1,
        )
        logger.info(f"{__name__}:__init__ - model={model}, temperature={temperature}")

    def generate(self, prompt: str) -> str:
        """
        Generate an answer for a fully assembled prompt.

        Raises:
            ProviderError: Transport failure, timeout or empty completion
        """
        try:
            message = self._llm.invoke(prompt)
        except Exception as e:
            logger.error(
                f"{__name__}:generate - Generation call failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise ProviderError(f"Generation failed: {e}", provider="generation") from e

        answer = _message_text(message.content).strip()
        if not answer:
            raise ProviderError(
                "Generation returned an empty completion",
                provider="generation",
            )
        return answer
