"""
File reading, writing and translation helpers for the command line
"""
from pathlib import Path
from typing import Optional

from src.config import TranslationConfig
from src.core.llm.factory import create_provider_from_config
from src.core.xhtml import XhtmlTranslationService, TranslationResult


def get_unique_output_path(output_path):
    """
    Generate a unique output path by adding a number suffix if the file already exists.

    Args:
        output_path (str): Desired output path

    Returns:
        str: Unique output path (original or with numeric suffix)

    Examples:
        page.xhtml -> page.xhtml (if doesn't exist)
        page.xhtml -> page (1).xhtml (if page.xhtml exists)
        page.xhtml -> page (2).xhtml (if page.xhtml and page (1).xhtml exist)
    """
    path = Path(output_path)

    if not path.exists():
        return output_path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix

    counter = 1
    while True:
        new_path = parent / f"{stem} ({counter}){suffix}"
        if not new_path.exists():
            return str(new_path)
        counter += 1


def default_output_path(input_path, target_language):
    """
    Output path used when none is given: <stem>_translated_<language><ext>

    Args:
        input_path (str): Path of the document being translated
        target_language (str): Target language name
    """
    path = Path(input_path)
    language = target_language.lower().replace(' ', '_')
    return str(path.with_name(f"{path.stem}_translated_{language}{path.suffix}"))


def read_document(filepath) -> str:
    """Read a document as UTF-8 text (a leading BOM is dropped)"""
    with open(filepath, 'r', encoding='utf-8-sig') as f:
        return f.read()


def write_document(filepath, content: str) -> None:
    """Write a document as UTF-8 text, creating parent directories"""
    path = Path(filepath)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)


async def translate_document_file(input_filepath, output_filepath, config: TranslationConfig,
                                  progress_callback=None, cancel_event=None,
                                  provider_factory=create_provider_from_config) -> TranslationResult:
    """
    Translate an XHTML/HTML file and write the result.

    Nothing is written when the translation fails.

    Args:
        input_filepath (str): Document to translate
        output_filepath (str): Destination path
        config (TranslationConfig): Languages, model, provider and limits
        progress_callback: Optional callback(completed, total)
        cancel_event: Optional asyncio.Event cancelling the translation
        provider_factory: Callable building an LLMProvider from a config

    Returns:
        TranslationResult
    """
    document_text = read_document(input_filepath)

    provider = provider_factory(config)
    try:
        service = XhtmlTranslationService(
            provider,
            concurrency_limit=config.max_concurrency,
            timeout=config.translation_timeout,
            non_translatable_tags=config.non_translatable_tags,
        )
        result = await service.translate(
            document_text,
            config.source_language,
            config.target_language,
            cancel_event=cancel_event,
            progress_callback=progress_callback,
        )
    finally:
        await provider.close()

    write_document(output_filepath, result.translated_text)
    return result
