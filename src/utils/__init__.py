"""
Utility modules

Note: high-level helpers such as translate_document_file are not re-exported
here. Import them directly from their module:

    from src.utils.file_utils import translate_document_file

This keeps the dependency hierarchy one-way:
    config → llm_logger → llm providers → xhtml service → file_utils
"""

__all__ = []
