from __future__ import annotations

from typing import List, Optional

from bs4 import Tag

from germanwiki.scraper.tree import MarkupTree

from .base import ListSection, SectionExtractor


class Meanings(ListSection):
    """Numbered senses; sub-senses (``[1a]``) follow the sense they refine."""

    key = "meanings"


class Examples(ListSection):
    key = "examples"


class Origin(SectionExtractor[str]):
    key = "origin"

    def parse(self, tree: MarkupTree, nodes: List[Tag]) -> Optional[str]:
        paragraphs = tree.list_items(nodes)
        if not paragraphs:
            paragraphs = [tree.text(node) for node in nodes]

        return "\n".join(paragraph for paragraph in paragraphs if paragraph) or None
