from __future__ import annotations

import re
from typing import List, Optional

from bs4 import Tag

from germanwiki.scraper.tree import MarkupTree

from .base import SectionExtractor

SYLLABLE_SEPARATORS = re.compile(r"[·‧]")
BRACKETED = re.compile(r"\[([^\[\]]+)\]")
MISSING = {"—", "–", "-", "…", "?"}


class Hyphenation(SectionExtractor[List[str]]):
    """Syllables of the lemma, e.g. ``Häu·ser`` becomes ``["Häu", "ser"]``."""

    key = "hyphenation"

    def parse(self, tree: MarkupTree, nodes: List[Tag]) -> Optional[List[str]]:
        items = tree.list_items(nodes) or [tree.text(node) for node in nodes]
        for item in items:
            lemma = item.split(",", 1)[0].strip()
            if lemma and lemma not in MISSING:
                return [part.strip() for part in SYLLABLE_SEPARATORS.split(lemma)]

        return None


class Pronunciation(SectionExtractor[List[str]]):
    """IPA transcriptions, regional variants included, in first-seen order."""

    key = "pronunciation"

    def parse(self, tree: MarkupTree, nodes: List[Tag]) -> List[str]:
        found: List[str] = []
        for node in nodes:
            for span in node.select(".ipa"):
                found.append(tree.text(span))

        if not found:
            for item in tree.list_items(nodes):
                found.extend(
                    token.strip()
                    for token in BRACKETED.findall(item)
                    if not token.strip().replace(",", "").replace(" ", "").isdigit()
                )

        return list(dict.fromkeys(ipa for ipa in found if ipa and ipa not in MISSING))
