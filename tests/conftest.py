"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import sys
import asyncio
from pathlib import Path
from typing import Callable, Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import pytest for fixtures
import pytest

from src.core.llm.base import LLMProvider, LLMResponse
from src.core.llm.exceptions import LLMProviderError


class FakeProvider(LLMProvider):
    """
    In-memory translation capability.

    Records every call and the peak number of concurrent calls. Texts listed
    in ``fail_on`` raise LLMProviderError.
    """

    def __init__(self, translate: Optional[Callable[[str], str]] = None, latency: float = 0.0,
                 fail_on=(), model: str = "fake-model"):
        super().__init__(model, timeout=5)
        self._translate = translate or (lambda text: "TR:" + text)
        self.latency = latency
        self.fail_on = set(fail_on)
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def generate(self, prompt, system_prompt=None):
        return LLMResponse(content=self._translate(prompt))

    async def translate_text(self, text, source_language, target_language):
        self.calls.append((text, source_language, target_language))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.latency:
                await asyncio.sleep(self.latency)
            if text in self.fail_on:
                raise LLMProviderError(f"cannot translate {text!r}")
            return self._translate(text)
        finally:
            self.in_flight -= 1

    async def close(self):
        self.closed = True
        await super().close()


@pytest.fixture
def fake_provider():
    """Provider prefixing every fragment with 'TR:'."""
    return FakeProvider()


@pytest.fixture
def sample_document():
    """Small document with a heading and a paragraph."""
    return "<div><h1>Hello</h1><p>World</p></div>"


@pytest.fixture
def sample_xhtml():
    """Namespaced XHTML document with a declaration, script and comment."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        '<head><title>Title</title><style>p { color: red; }</style></head>'
        '<body>'
        '<p class="intro">Hello <b>bold</b> world</p>'
        '<!-- a comment -->'
        '<script>var x = "keep";</script>'
        '</body>'
        '</html>'
    )


@pytest.fixture
def make_provider():
    """Factory building FakeProvider instances with custom behaviour."""
    return FakeProvider
