"""
Accessors for the services created at startup and kept on app.state.
"""

from fastapi import Request

from table_explorer.core.errors import BackendUnavailable, GenerationFailed


def get_table_store(request: Request):
    table_store = getattr(request.app.state, "table_store", None)
    if table_store is None:
        raise BackendUnavailable("Table store is not initialized. Check AWS configuration and restart.")
    return table_store


def get_prompt_service(request: Request):
    prompt_service = getattr(request.app.state, "prompt_service", None)
    if prompt_service is None:
        raise GenerationFailed("Prompt service is not initialized. Check configuration and restart.")
    return prompt_service
