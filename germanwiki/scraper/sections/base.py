from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, List, Optional, TypeVar

from bs4 import Tag

from germanwiki.scraper.config import SectionLabels, load_labels
from germanwiki.scraper.models import SectionResult
from germanwiki.scraper.tree import MarkupTree
from germanwiki.shared.formatter import strip_sense_marker

T = TypeVar("T")


class SectionExtractor(ABC, Generic[T]):
    """One section of a dictionary page, located by heading and parsed into ``T``."""

    key: ClassVar[str]
    labels: SectionLabels

    def __init__(self, labels: Optional[SectionLabels] = None) -> None:
        self.labels = labels or load_labels().section(self.key)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.key}>"

    def locate(self, tree: MarkupTree, level: Optional[int] = None) -> Optional[List[Tag]]:
        """
        The nodes belonging to this section, or None when no label variant matches.

        Pages with several parts of speech repeat a section once per part;
        the blocks are returned one after the other.
        """

        headings = tree.find_headings(self.labels.labels, self.labels.level)
        if not headings:
            return None

        return [
            node
            for heading in headings
            for node in tree.collect_until_next_heading(heading, level)
        ]

    def extract(self, tree: MarkupTree) -> SectionResult[T]:
        nodes = self.locate(tree)
        if nodes is None:
            return SectionResult.absent()

        return SectionResult.of(self.parse(tree, nodes))

    @abstractmethod
    def parse(self, tree: MarkupTree, nodes: List[Tag]) -> Optional[T]:
        ...  # pragma: no cover


class ListSection(SectionExtractor[List[str]]):
    """A section rendered as a (possibly nested) list, one string per item."""

    def parse(self, tree: MarkupTree, nodes: List[Tag]) -> List[str]:
        return [strip_sense_marker(item) for item in tree.list_items(nodes)]
