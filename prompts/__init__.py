"""
Prompts module for the XHTML translator
"""
from prompts.prompts import (
    PromptPair,
    TRANSLATION_RULES,
    generate_translation_prompt,
)

__all__ = [
    "PromptPair",
    "TRANSLATION_RULES",
    "generate_translation_prompt",
]
