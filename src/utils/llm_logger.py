"""
LLM logging utilities for debugging and transparency

Provides utilities to log LLM interactions (prompts and responses)
when DEBUG_MODE is enabled.
"""
import logging
from typing import Optional
from src.config import DEBUG_MODE

logger = logging.getLogger('llm')


def log_llm_interaction(
    system_prompt: Optional[str],
    user_prompt: str,
    raw_response: str,
    model: str = "",
    prefix: str = "",
    prompt_tokens: int = 0,
    completion_tokens: int = 0
):
    """
    Log full LLM interaction details when DEBUG_MODE is enabled.

    Shows exactly what is sent to and received from the model for one
    fragment translation.

    Args:
        system_prompt: The system prompt (role/instructions)
        user_prompt: The user prompt (content to process)
        raw_response: Raw LLM response before cleanup
        model: Model identifier
        prefix: Optional prefix for log messages (e.g., provider name)
        prompt_tokens: Prompt token count reported by the server
        completion_tokens: Completion token count reported by the server
    """
    if not should_log_llm_details():
        return

    separator = "=" * 80
    prefix_str = f"[{prefix}] " if prefix else ""
    parts = [separator, f"{prefix_str}LLM interaction - model {model or '(unknown)'}", separator]
    if system_prompt:
        parts.extend(["System prompt:", system_prompt, "-" * 80])
    parts.extend(["User prompt:", user_prompt, "-" * 80])
    parts.extend(["Raw response:", raw_response, "-" * 80])
    parts.extend([f"Tokens: prompt {prompt_tokens}, completion {completion_tokens}", separator])
    logger.debug("\n".join(parts))


def should_log_llm_details() -> bool:
    """
    Check if LLM detailed logging should be enabled.

    Returns:
        True if DEBUG_MODE is enabled, False otherwise
    """
    return DEBUG_MODE
