"""
LLM Utility Modules

Shared utilities used across multiple providers.

Components:
    - extraction: Translation cleanup of raw LLM responses
"""

from .extraction import clean_translation_output, remove_think_blocks

__all__ = ['clean_translation_output', 'remove_think_blocks']
