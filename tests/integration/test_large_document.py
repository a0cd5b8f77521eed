"""
Integration test: translating a large, deeply structured document.

Uses a deterministic translator that reverses each fragment and tags it with
the target language, so every translated slot can be checked individually.
"""
import pytest
from lxml import etree

from src.core.xhtml import XhtmlTranslationService, parse_document, collect_fragments


def _reverse_translator(target_language):
    return lambda text: f"[{target_language}] {text[::-1]}"


def _build_document(chapters=20, paragraphs=15):
    parts = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Large book</title>',
        '<style>body { margin: 0; }</style></head><body>',
    ]
    for c in range(chapters):
        parts.append(f'<section id="ch{c}"><h2 class="title">Chapter {c}</h2>')
        for p in range(paragraphs):
            parts.append(
                f'<p data-n="{p}">Paragraph {c}.{p} with <em>emphasis {p}</em> and a '
                f'<a href="#n{p}">link</a>.</p>'
            )
        parts.append('<script>track("chapter");</script></section>')
    parts.append('</body></html>')
    return "\n".join(parts)


@pytest.mark.asyncio
async def test_large_document_every_fragment_translated(make_provider):
    document = _build_document()
    expected_fragments = collect_fragments(parse_document(document))
    provider = make_provider(translate=_reverse_translator("fr"), latency=0.001)
    service = XhtmlTranslationService(provider, concurrency_limit=10)

    result = await service.translate(document, "English", "French")

    assert len(provider.calls) == len(expected_fragments)
    assert sorted(call[0] for call in provider.calls) == sorted(f.text for f in expected_fragments)
    assert provider.max_in_flight <= 10

    original = parse_document(document)
    translated = parse_document(result.translated_text)

    # Same shape and attributes
    original_elements = list(original.iter())
    translated_elements = list(translated.iter())
    assert [e.tag for e in original_elements] == [e.tag for e in translated_elements]
    assert [dict(e.attrib) for e in original_elements if isinstance(e.tag, str)] == \
        [dict(e.attrib) for e in translated_elements if isinstance(e.tag, str)]

    # Every eligible slot replaced, everything else untouched
    for before, after in zip(original_elements, translated_elements):
        for slot in ("text", "tail"):
            old, new = getattr(before, slot), getattr(after, slot)
            if new is not None and new.startswith("[fr] "):
                assert new == f"[fr] {old[::-1]}"
            else:
                assert new == old

    ns = {"x": "http://www.w3.org/1999/xhtml"}
    scripts = translated.xpath("//x:script/text()", namespaces=ns)
    assert scripts == ['track("chapter");'] * 20
    assert translated.xpath("//x:style/text()", namespaces=ns) == ["body { margin: 0; }"]
    assert translated.xpath("//x:title/text()", namespaces=ns) == ["[fr] koob egraL"]


@pytest.mark.asyncio
async def test_large_document_same_output_for_any_limit(make_provider):
    document = _build_document(chapters=5, paragraphs=10)

    outputs = []
    for limit in (1, 7, 50):
        provider = make_provider(translate=_reverse_translator("de"))
        result = await XhtmlTranslationService(provider, concurrency_limit=limit).translate(
            document, "English", "German")
        outputs.append(result.translated_text)

    assert outputs[0] == outputs[1] == outputs[2]
    assert etree.fromstring(outputs[0].encode("utf-8")) is not None
