"""
Prompt Controller

Handles the "ask AI about this table" endpoint.
"""

import logging

from table_explorer.models.schemas import PromptRequest, PromptResponse
from table_explorer.services.prompt_service import PromptAugmentationService

logger = logging.getLogger("table_explorer")


def process_prompt(
    table_name: str,
    payload: PromptRequest,
    prompt_service: PromptAugmentationService
) -> PromptResponse:
    """
    Answer the user's question with the table's rows as context.

    Args:
        table_name: Table whose rows become the context
        payload: Prompt request payload
        prompt_service: Prompt augmentation service instance

    Returns:
        PromptResponse with the model's answer
    """
    logger.info(f"[prompts] table={table_name} prompt_len={len(payload.prompt)}")
    answer = prompt_service.ask(table_name, payload.prompt)
    return PromptResponse(response=answer)
