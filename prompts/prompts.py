from typing import NamedTuple


class PromptPair(NamedTuple):
    """A pair of system and user prompts for LLM translation."""
    system: str
    user: str


# ============================================================================
# SHARED PROMPT SECTIONS
# ============================================================================

TRANSLATION_RULES = (
    "1. Output ONLY the translated text.\n"
    "2. Do NOT add notes, explanations, or enclosing quotes.\n"
    "3. Preserve the original meaning and tone.\n"
    "4. If the text is a number or proper noun that shouldn't change, keep it as is.\n"
    "5. If the translation is unclear, provide the most direct literal translation."
)


def _get_system_section(source_language: str, target_language: str) -> str:
    """
    Generate the role and rules given to the model for a fragment translation.

    Args:
        source_language: Language of the fragment
        target_language: Language to translate into

    Returns:
        System prompt text
    """
    return (
        f"You are a professional translator from {source_language} to {target_language}. "
        "You receive short fragments of text extracted from a web document.\n"
        f"Rules:\n{TRANSLATION_RULES}"
    )


def generate_translation_prompt(text: str, source_language: str, target_language: str) -> PromptPair:
    """
    Build the prompts for translating a single document fragment.

    Args:
        text: Fragment text (surrounding whitespace already removed)
        source_language: Language of the fragment
        target_language: Language to translate into

    Returns:
        PromptPair with system and user prompts
    """
    user = (
        f"Translate the following text from {source_language} to {target_language}.\n\n"
        f"Text to translate:\n\"{text}\""
    )
    return PromptPair(system=_get_system_section(source_language, target_language), user=user)
