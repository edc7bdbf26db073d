"""
List item extraction for <ul> and <ol>.

Only the first child of each item is inspected: a text first child becomes a
TextBlock, an element first child becomes a ParagraphBlock built from that
element's inline runs. Anything after the first child of an item is not
extracted, so items never contain nested lists.
"""

from typing import Optional

from bs4.element import PageElement

from . import tree
from .inline import InlineRunExtractor
from .schemas import CommonRun, ContentBlock, ParagraphBlock, TextBlock


class ListItemExtractor:
    """Turns the element children of a list into one block per item."""

    def __init__(self, inline: Optional[InlineRunExtractor] = None):
        self.inline = inline or InlineRunExtractor()

    def extract(self, list_node: PageElement) -> list[ContentBlock]:
        items = []
        for child in tree.children(list_node):
            # Whitespace between <li>s and comments are not items
            if not tree.is_element(child):
                continue
            item = self._item(child)
            if item is not None:
                items.append(item)
        return items

    def _item(self, item_node: PageElement) -> Optional[ContentBlock]:
        first = tree.first_child(item_node)
        text = tree.text_of(first)
        if text is not None:
            return TextBlock(run=CommonRun(text=text.strip()))
        if tree.is_element(first):
            return ParagraphBlock(runs=self.inline.extract(first))
        return None


def extract_list_items(list_node: PageElement, inline: Optional[InlineRunExtractor] = None) -> list[ContentBlock]:
    """Convenience function to extract the items of one list."""
    return ListItemExtractor(inline).extract(list_node)
