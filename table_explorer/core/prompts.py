"""
Prompt text and context building for "ask AI about this table".
"""

import json
import logging
from typing import Any, Dict, Iterable

logger = logging.getLogger("table_explorer")

SYSTEM_PROMPT = "You are a helpful assistant that analyzes data and answers questions about it."

EXAMPLE_QUESTIONS = [
    "How many records are there in total?",
    "What is the latest entry?",
    "Can you summarize this data?",
    "Show me any interesting patterns",
]


def serialize_row(row: Dict[str, Any]) -> str:
    """One compact JSON line per row; non-JSON values fall back to str()."""
    return json.dumps(row, ensure_ascii=False, default=str)


def build_table_context(rows: Iterable[Dict[str, Any]], max_chars: int) -> str:
    """
    Newline-joined JSON lines for ``rows``, cut at a row boundary so the
    result never exceeds ``max_chars``.
    """
    lines = []
    size = 0
    for row in rows:
        line = serialize_row(row)
        added = len(line) + (1 if lines else 0)
        if size + added > max_chars:
            logger.warning(
                f"Prompt context truncated at {len(lines)} rows ({size} chars, limit {max_chars})"
            )
            break
        lines.append(line)
        size += added
    return "\n".join(lines)


def build_prompt(context: str, question: str) -> str:
    return f"{context}\n\n{question}"
