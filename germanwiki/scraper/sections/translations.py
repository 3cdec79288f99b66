from __future__ import annotations

import re
from typing import Dict, List, Optional

from bs4 import Tag

from germanwiki.scraper.tree import PARAGRAPH_LEVEL, MarkupTree
from germanwiki.shared.formatter import drop_sense_markers

from .base import SectionExtractor

# separators inside parentheses belong to a transliteration, e.g. ``家 (いえ, ie)``
SEPARATORS = re.compile(r"\s*[;,]\s*(?![^()]*\))")


class Translations(SectionExtractor[Dict[str, List[str]]]):
    """Items shaped like ``Englisch: [1] house; [2] home`` keyed by language."""

    key = "translations"

    def locate(self, tree: MarkupTree, level: Optional[int] = None) -> Optional[List[Tag]]:
        # the translation box ends at the first reference paragraph
        return super().locate(tree, level or PARAGRAPH_LEVEL)

    def parse(self, tree: MarkupTree, nodes: List[Tag]) -> Dict[str, List[str]]:
        translations: Dict[str, List[str]] = {}
        for item in tree.list_items(nodes):
            language, separator, rest = item.partition(":")
            if not separator or not language.strip():
                continue

            words = [
                word
                for word in SEPARATORS.split(drop_sense_markers(rest))
                if word and word not in ("—", "–", "-")
            ]
            translations.setdefault(language.strip(), []).extend(words)

        return translations
