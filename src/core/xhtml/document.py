"""
Document parsing and serialization

Two parsing modes are supported:

- XML mode: documents that start with an XML declaration or declare the
  XHTML namespace on their root element. Parsed with lxml's XML parser
  (no entity resolution, no network access) and written back as XML.
  Named HTML entities are rewritten as character references first and
  CDATA sections are kept.
- HTML mode: everything else. Parsed with ``lxml.html.document_fromstring``,
  which wraps fragments in ``<html><body>``, and written back with the
  HTML serialization method.
"""
import re
import logging
from html.entities import html5 as HTML5_ENTITIES
from typing import Optional

from lxml import etree
from lxml import html as lxml_html

from .constants import XHTML_NAMESPACE, CONTENT_PREVIEW_LENGTH
from .exceptions import DocumentParseError, DocumentSerializationError

logger = logging.getLogger(__name__)

_XML_DECLARATION_RE = re.compile(r'^\s*<\?xml\s', re.IGNORECASE)
_FIRST_START_TAG_RE = re.compile(r'<([A-Za-z][^\s/>]*)([^>]*)>')
# CDATA sections and comments are matched first so entities inside them stay literal
_ENTITY_REF_RE = re.compile(r'<!\[CDATA\[.*?\]\]>|<!--.*?-->|&([A-Za-z][A-Za-z0-9]*);', re.DOTALL)
_XML_PREDEFINED_ENTITIES = frozenset({'amp', 'lt', 'gt', 'quot', 'apos'})


def has_xml_declaration(document_text: str) -> bool:
    """Check whether the document starts with an ``<?xml ...?>`` declaration"""
    return bool(_XML_DECLARATION_RE.match(document_text.lstrip('\ufeff')))


def _declares_xhtml_namespace(document_text: str) -> bool:
    """Check whether the first start tag declares the XHTML default namespace"""
    # Skip declaration, doctype, comments and PIs before the root element
    body = re.sub(r'<\?.*?\?>|<!--.*?-->|<![^>]*>', '', document_text, flags=re.DOTALL)
    match = _FIRST_START_TAG_RE.search(body)
    if not match:
        return False
    attributes = match.group(2)
    return re.search(
        r'xmlns\s*=\s*["\']' + re.escape(XHTML_NAMESPACE) + r'["\']',
        attributes
    ) is not None


def is_xml_document(document_text: str) -> bool:
    """Decide whether a document should be handled in XML mode"""
    return has_xml_declaration(document_text) or _declares_xhtml_namespace(document_text)


def _replace_html_entity(match) -> str:
    name = match.group(1)
    if name is None or name in _XML_PREDEFINED_ENTITIES:
        return match.group(0)
    replacement = HTML5_ENTITIES.get(name + ';')
    if replacement is None:
        return match.group(0)
    return ''.join(f'&#{ord(char)};' for char in replacement)


def convert_html_entities(document_text: str) -> str:
    """
    Rewrite named HTML entities (``&nbsp;``, ``&eacute;``...) as numeric
    character references so the XML parser accepts them.

    The five predefined XML entities, unknown names and anything inside
    CDATA sections or comments are left as they are.
    """
    if '&' not in document_text:
        return document_text
    return _ENTITY_REF_RE.sub(_replace_html_entity, document_text)


def _preview(document_text: str) -> str:
    return document_text[:CONTENT_PREVIEW_LENGTH]


def parse_document(document_text: str) -> etree._Element:
    """
    Parse document text into an lxml tree.

    Args:
        document_text: Raw XHTML/HTML markup

    Returns:
        Root element of the parsed document

    Raises:
        DocumentParseError: If the markup cannot be parsed
    """
    if is_xml_document(document_text):
        parser = etree.XMLParser(
            encoding='utf-8',
            resolve_entities=False,
            no_network=True,
            remove_blank_text=False,
            strip_cdata=False,
        )
        try:
            markup = convert_html_entities(document_text.lstrip('\ufeff'))
            # Encoded because lxml refuses str input carrying an encoding declaration
            root = etree.fromstring(markup.encode('utf-8'), parser)
        except (etree.LxmlError, ValueError) as e:
            raise DocumentParseError(
                f"Failed to parse XHTML document: {e}",
                original_error=e,
                content_preview=_preview(document_text)
            ) from e
        mode = 'xml'
    else:
        try:
            root = lxml_html.document_fromstring(document_text)
        except (etree.LxmlError, ValueError) as e:
            raise DocumentParseError(
                f"Failed to parse HTML document: {e}",
                original_error=e,
                content_preview=_preview(document_text)
            ) from e
        mode = 'html'

    if root is None:
        raise DocumentParseError(
            "Parser returned no root element",
            content_preview=_preview(document_text)
        )

    logger.debug(f"Parsed document in {mode} mode (root <{etree.QName(root).localname}>)")
    return root


def serialize_document(root: etree._Element, xml_declaration: Optional[bool] = None) -> str:
    """
    Serialize a parsed tree back to text.

    The serialization method follows the parsing mode: trees built by the
    HTML parser are written with the HTML method, all others as XML.

    Args:
        root: Root element returned by parse_document
        xml_declaration: Emit an XML declaration (XML mode only). Defaults to False.

    Returns:
        Document markup

    Raises:
        DocumentSerializationError: If the tree cannot be rendered
    """
    tree = root.getroottree()
    try:
        if isinstance(root, lxml_html.HtmlElement):
            return etree.tostring(tree, method='html', encoding='unicode')
        if xml_declaration:
            return etree.tostring(
                tree, encoding='utf-8', xml_declaration=True, method='xml'
            ).decode('utf-8')
        return etree.tostring(tree, encoding='unicode', method='xml')
    except (etree.LxmlError, ValueError, TypeError) as e:
        raise DocumentSerializationError(
            f"Failed to serialize document: {e}",
            original_error=e
        ) from e
