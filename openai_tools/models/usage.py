"""
Token accounting returned with completions, responses and embeddings.
"""

from typing import Any, Dict, Optional

from openai_tools.models.base import WireModel


class Usage(WireModel):
    """
    Token usage for a request.

    Chat and embeddings report ``prompt_tokens``/``completion_tokens``; the
    Responses API and Realtime report ``input_tokens``/``output_tokens``. Only
    the fields the server sent are populated.
    """

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    prompt_tokens_details: Optional[Dict[str, Any]] = None
    completion_tokens_details: Optional[Dict[str, Any]] = None
    input_tokens_details: Optional[Dict[str, Any]] = None
    output_tokens_details: Optional[Dict[str, Any]] = None
