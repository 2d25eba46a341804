"""
Tests for prompt augmentation: context building, throttling, provider errors.
"""
import json
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from conftest import StubChatModel
from table_explorer.core.errors import GenerationFailed, TableNotFound
from table_explorer.core.prompts import SYSTEM_PROMPT, build_prompt, build_table_context
from table_explorer.services.prompt_service import PromptAugmentationService


@pytest.fixture
def prompt_service(table_store, rate_limiter, chat_model):
    return PromptAugmentationService(
        table_store=table_store,
        llm_service=MagicMock(),
        rate_limiter=rate_limiter,
        max_context_chars=10_000,
        llm=chat_model,
    )


class TestBuildContext:
    def test_one_json_line_per_row(self, orders):
        context = build_table_context(orders, 10_000)
        lines = context.split("\n")
        assert len(lines) == 3
        assert [json.loads(line) for line in lines] == orders

    def test_bounded_at_row_boundary(self, orders):
        first_line = json.dumps(orders[0])
        context = build_table_context(orders, len(first_line) + 5)
        assert context == first_line

    def test_empty_rows(self):
        assert build_table_context([], 100) == ""

    def test_prompt_layout(self):
        assert build_prompt("ctx", "How many?") == "ctx\n\nHow many?"


class TestAsk:
    def test_returns_model_answer(self, prompt_service):
        assert prompt_service.ask("ORDERS", "How many orders?") == "There are 3 orders."

    def test_sends_system_and_augmented_prompt(self, prompt_service, chat_model, orders):
        prompt_service.ask("ORDERS", "How many orders?")

        messages = chat_model.calls[0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == SYSTEM_PROMPT
        assert isinstance(messages[1], HumanMessage)
        context = "\n".join(json.dumps(row) for row in orders)
        assert messages[1].content == f"{context}\n\nHow many orders?"

    def test_second_call_is_throttled(self, prompt_service, fake_clock):
        prompt_service.ask("ORDERS", "first")
        first = prompt_service.rate_limiter.last_dispatch
        fake_clock.advance(0.2)

        prompt_service.ask("ORDERS", "second")

        assert fake_clock.sleeps == [pytest.approx(0.8)]
        assert prompt_service.rate_limiter.last_dispatch - first >= 1.0 - 1e-9

    def test_provider_failure(self, table_store, rate_limiter):
        service = PromptAugmentationService(
            table_store=table_store,
            llm_service=MagicMock(),
            rate_limiter=rate_limiter,
            llm=StubChatModel(error=RuntimeError("rate limit exceeded")),
        )
        with pytest.raises(GenerationFailed) as exc_info:
            service.ask("ORDERS", "anything")
        assert "rate limit exceeded" in str(exc_info.value)
        assert exc_info.value.kind == "GenerationFailed"

    def test_missing_api_key_is_generation_failure(self, table_store, rate_limiter):
        llm_service = MagicMock()
        llm_service.get_llm_model.side_effect = ValueError("OpenAI API key not found.")
        service = PromptAugmentationService(
            table_store=table_store, llm_service=llm_service, rate_limiter=rate_limiter
        )
        with pytest.raises(GenerationFailed, match="API key"):
            service.ask("ORDERS", "anything")

    def test_unknown_table_propagates(self, prompt_service, chat_model):
        with pytest.raises(TableNotFound):
            prompt_service.ask("NOPE", "anything")
        assert chat_model.calls == []

    def test_model_is_built_once(self, table_store, rate_limiter, chat_model):
        llm_service = MagicMock()
        llm_service.get_llm_model.return_value = chat_model
        service = PromptAugmentationService(
            table_store=table_store, llm_service=llm_service, rate_limiter=rate_limiter
        )
        service.ask("ORDERS", "a")
        service.ask("ORDERS", "b")
        llm_service.get_llm_model.assert_called_once()
