"""
Prompt Routes
"""

from fastapi import APIRouter, Request
from table_explorer.api.dependencies import get_prompt_service
from table_explorer.controllers.prompt_controller import process_prompt
from table_explorer.models.schemas import ErrorResponse, PromptRequest, PromptResponse

router = APIRouter(prefix="/api", responses={500: {"model": ErrorResponse}})


@router.post("/prompts/{tableName}", response_model=PromptResponse)
def prompt_api(request: Request, tableName: str, payload: PromptRequest):
    """
    Prompt Endpoint

    Sends the user's question, with the table's rows as context, to the LLM
    and returns its answer.
    """
    return process_prompt(
        table_name=tableName,
        payload=payload,
        prompt_service=get_prompt_service(request)
    )
