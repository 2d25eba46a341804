"""
Prompt Augmentation Service

Answers a free-text question about a table: fetch every row, serialize them
into a bounded text context, append the question, wait for the rate limiter
and send the result to the chat model.
"""

import logging
import time
from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from table_explorer.config.settings import settings
from table_explorer.core.errors import GenerationFailed
from table_explorer.core.prompts import SYSTEM_PROMPT, build_prompt, build_table_context
from table_explorer.core.rate_limiter import MinIntervalRateLimiter
from table_explorer.services.llm_service import LLMService
from table_explorer.services.table_store_service import TableStoreService

logger = logging.getLogger("table_explorer")


def _response_text(message) -> str:
    """Extract plain text from a chat model reply (string or content blocks)."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)


class PromptAugmentationService:
    """
    Owns the process-wide rate limiter for outbound generation calls.

    Args:
        table_store: Gateway used to fetch the context rows
        llm_service: Builds the chat model lazily on first use
        rate_limiter: Defaults to one spaced by PROMPT_MIN_INTERVAL_MS
        max_context_chars: Upper bound on the serialized rows
    """

    def __init__(
        self,
        table_store: TableStoreService,
        llm_service: Optional[LLMService] = None,
        rate_limiter: Optional[MinIntervalRateLimiter] = None,
        max_context_chars: Optional[int] = None,
        llm: Optional[BaseChatModel] = None,
    ):
        self.table_store = table_store
        self.llm_service = llm_service or LLMService()
        self.rate_limiter = rate_limiter or MinIntervalRateLimiter(settings.prompt_min_interval_seconds)
        self.max_context_chars = max_context_chars or settings.PROMPT_CONTEXT_MAX_CHARS
        self._llm = llm

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = self.llm_service.get_llm_model()
        return self._llm

    def generate(self, prompt: str) -> str:
        """Send one prompt to the chat model, honoring the rate limiter."""
        try:
            llm = self._get_llm()
        except ValueError as e:
            raise GenerationFailed(str(e)) from e

        waited = self.rate_limiter.acquire()
        t0 = time.perf_counter()
        try:
            reply = llm.invoke([
                SystemMessage(content=SYSTEM_PROMPT),
                HumanMessage(content=prompt),
            ])
        except Exception as e:
            logger.error(f"Generation error: {e}")
            raise GenerationFailed(f"Generation failed: {e}") from e

        logger.info(
            f"[prompt] generation done in {time.perf_counter() - t0:.2f}s "
            f"(throttled {waited * 1000:.0f}ms, prompt_len={len(prompt)})"
        )
        return _response_text(reply)

    def ask(self, table_name: str, question: str) -> str:
        """
        Answer ``question`` using every row of ``table_name`` as context.

        Raises:
            TableNotFound / BackendUnavailable: from the table store
            GenerationFailed: the provider call failed
        """
        rows = self.table_store.get_all_rows(table_name)
        context = build_table_context(rows, self.max_context_chars)
        logger.info(
            f"[prompt] table={table_name} rows={len(rows)} context_len={len(context)} "
            f"question_len={len(question)}"
        )
        return self.generate(build_prompt(context, question))
