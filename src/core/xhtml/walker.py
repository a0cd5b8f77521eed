"""
Tree walker collecting translatable text fragments

lxml stores text in two slots per element: ``text`` (before the first child)
and ``tail`` (after the element's end tag, inside its parent). Each slot is
treated as one text node. A fragment is emitted for every slot whose content
is not whitespace-only and whose parent element is not a non-translatable
container (script, style by default).
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from lxml import etree

from .constants import DEFAULT_NON_TRANSLATABLE_TAGS

TEXT_SLOT = 'text'
TAIL_SLOT = 'tail'


@dataclass
class TextFragment:
    """One translatable text slot of the document tree.

    Attributes:
        element_ref: Element owning the slot
        slot: 'text' or 'tail'
        original_text: Content of the slot when it was collected
        index: Position in document order
    """
    element_ref: etree._Element = field(repr=False)
    slot: str
    original_text: str
    index: int

    @property
    def text(self) -> str:
        return self.original_text

    @property
    def parent(self) -> Optional[etree._Element]:
        """Element that contains this text node"""
        if self.slot == TEXT_SLOT:
            return self.element_ref
        return self.element_ref.getparent()

    def write(self, translated: str) -> None:
        """Replace the slot's content in the tree"""
        setattr(self.element_ref, self.slot, translated)


def local_tag_name(element: Optional[etree._Element]) -> Optional[str]:
    """
    Return the lower-cased tag name of an element without its namespace.

    Comments, processing instructions and entities have no string tag and
    yield None.
    """
    if element is None or not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname.lower()


def _is_eligible(content: Optional[str], parent: Optional[etree._Element], skip_tags) -> bool:
    if not content or not content.strip():
        return False
    if parent is None:
        return False
    return local_tag_name(parent) not in skip_tags


def collect_fragments(
    root: etree._Element,
    non_translatable_tags: Iterable[str] = DEFAULT_NON_TRANSLATABLE_TAGS
) -> List[TextFragment]:
    """
    Collect translatable text fragments in depth-first pre-order.

    The traversal is iterative so deeply nested documents do not hit the
    interpreter recursion limit. The tree is not modified.

    Args:
        root: Root element of the parsed document
        non_translatable_tags: Local tag names whose direct text is skipped

    Returns:
        Fragments in document order (possibly empty)
    """
    skip_tags = frozenset(tag.lower() for tag in non_translatable_tags)
    fragments: List[TextFragment] = []

    # Stack entries: (element, exiting). An element is pushed twice, once to
    # emit its text and descend, once to emit its tail after its subtree.
    stack = [(root, False)]
    while stack:
        element, exiting = stack.pop()

        if exiting:
            if element is not root:
                parent = element.getparent()
                if _is_eligible(element.tail, parent, skip_tags):
                    fragments.append(TextFragment(element, TAIL_SLOT, element.tail, len(fragments)))
            continue

        stack.append((element, True))

        # Comment and PI content is not a text node
        if isinstance(element.tag, str):
            if _is_eligible(element.text, element, skip_tags):
                fragments.append(TextFragment(element, TEXT_SLOT, element.text, len(fragments)))

        for child in reversed(element):
            stack.append((child, False))

    return fragments
