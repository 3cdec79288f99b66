"""
Section-scoped queries over a rendered wiki page.

de.wiktionary renders two kinds of headings: real ``<h1>``-``<h6>`` headings
(optionally wrapped in ``<div class="mw-heading">``) for languages, parts of
speech and translations, and short paragraphs such as ``<p>Synonyme:</p>``
which introduce the ``<dl>`` lists of an entry. Both are treated as headings
here, the paragraph kind one level below ``<h6>``.
"""

from __future__ import annotations

from copy import copy
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from germanwiki.shared.formatter import collapse

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
PARAGRAPH_LEVEL = 7
LIST_TAGS = ("ul", "ol", "dl")
ITEM_TAGS = ("li", "dd")
NOISE = "sup, .mw-editsection, .reference, .references, style, script"


class Cell(NamedTuple):
    row: int
    col: int
    text: str
    header: bool


def normalize_label(value: str) -> str:
    return collapse(value).rstrip(":").strip().casefold()


def _span(cell: Tag, attribute: str) -> int:
    try:
        return max(1, min(int(str(cell.get(attribute, 1)).strip()), 100))
    except ValueError:
        return 1


class MarkupTree:
    soup: BeautifulSoup

    def __init__(self, markup: Union[str, BeautifulSoup, None]) -> None:
        if isinstance(markup, BeautifulSoup):
            self.soup = markup
        else:
            self.soup = BeautifulSoup(markup or "", "html.parser")

        # pages that title their paragraph headings get no colon-only fallback
        self.titled_paragraphs = any(
            paragraph.get("title") and self._reads_as_label(paragraph)
            for paragraph in self.soup.find_all("p")
        )

    def __repr__(self) -> str:
        return f"<MarkupTree headings={sum(1 for _ in self.headings())}>"

    # text

    def text(self, node: Union[Tag, NavigableString, None], drop_lists: bool = False) -> str:
        """Plain text of a node with footnotes, edit links and reference lists removed."""

        if node is None:
            return ""

        if not isinstance(node, Tag):
            return collapse(str(node))

        clone = copy(node)
        for junk in clone.select(NOISE):
            junk.decompose()

        if drop_lists:
            for nested in clone.find_all(LIST_TAGS):
                nested.decompose()

        for br in clone.find_all("br"):
            br.replace_with(" ")

        return collapse(clone.get_text())

    # headings

    def heading_level(self, node) -> Optional[int]:
        if not isinstance(node, Tag):
            return None

        if node.name in HEADING_TAGS:
            return int(node.name[1])

        if node.name == "div" and "mw-heading" in (node.get("class") or []):
            inner = node.find(HEADING_TAGS)
            return int(inner.name[1]) if inner else None

        if node.name == "p" and self.is_pseudo_heading(node):
            return PARAGRAPH_LEVEL

        return None

    def _reads_as_label(self, node: Tag) -> bool:
        if node.find(LIST_TAGS):
            return False

        text = self.text(node)
        return 0 < len(text) <= 80 and text.endswith(":")

    def is_pseudo_heading(self, node: Tag) -> bool:
        """A short ``Label:`` paragraph; only ``p[title]`` ones when the page titles them."""

        if not self._reads_as_label(node):
            return False

        return bool(node.get("title")) or not self.titled_paragraphs

    def heading_label(self, node: Tag) -> str:
        if node.name == "div":
            node = node.find(HEADING_TAGS) or node

        headline = node.find("span", class_="mw-headline")
        return self.text(headline or node)

    def heading_ids(self, node: Tag) -> List[str]:
        candidates = [node, *node.find_all(HEADING_TAGS), *node.find_all("span", class_="mw-headline")]
        return [str(tag["id"]) for tag in candidates if tag.get("id")]

    def headings(self, level: Optional[int] = None) -> Iterator[Tag]:
        """Every heading in document order, wrappers in place of the wrapped tag."""

        for node in self.soup.find_all((*HEADING_TAGS, "p")):
            parent = node.parent
            if (
                node.name in HEADING_TAGS
                and isinstance(parent, Tag)
                and parent.name == "div"
                and "mw-heading" in (parent.get("class") or [])
            ):
                node = parent

            node_level = self.heading_level(node)
            if node_level is None:
                continue

            if level is None or node_level == level:
                yield node

    def find_headings(
        self, labels: Iterable[str], level: Optional[int] = None
    ) -> List[Tag]:
        """Every heading matching any of ``labels``, in document order."""

        wanted = {normalize_label(label) for label in labels} - {""}
        wanted_ids = {label.replace(" ", "_") for label in wanted}
        if not wanted:
            return []

        return [
            node
            for node in self.headings(level)
            if normalize_label(self.heading_label(node)) in wanted
            or wanted_ids.intersection(
                normalize_label(node_id) for node_id in self.heading_ids(node)
            )
        ]

    def find_heading(self, label: str, level: Optional[int] = None) -> Optional[Tag]:
        found = self.find_headings([label], level)
        return found[0] if found else None

    def find_first_heading(
        self, labels: Iterable[str], level: Optional[int] = None
    ) -> Optional[Tag]:
        for label in labels:
            node = self.find_heading(label, level)
            if node is not None:
                return node

        return None

    def collect_until_next_heading(
        self, node: Tag, level: Optional[int] = None
    ) -> List[Tag]:
        """Siblings after ``node`` up to the next heading at or above ``level``."""

        level = level or self.heading_level(node) or PARAGRAPH_LEVEL
        nodes: List[Tag] = []
        for sibling in node.next_siblings:
            if not isinstance(sibling, Tag):
                continue

            sibling_level = self.heading_level(sibling)
            if sibling_level is not None and sibling_level <= level:
                break

            nodes.append(sibling)

        return nodes

    # lists

    def _outermost_lists(self, node: Tag) -> Iterator[Tag]:
        for child in node.children:
            if not isinstance(child, Tag):
                continue

            if child.name in LIST_TAGS:
                yield child
            else:
                yield from self._outermost_lists(child)

    def _walk_list(self, lst: Tag) -> Iterator[str]:
        for item in lst.find_all(ITEM_TAGS, recursive=False):
            text = self.text(item, drop_lists=True)
            if text:
                yield text

            for nested in self._outermost_lists(item):
                yield from self._walk_list(nested)

    def list_items(self, nodes: Union[Tag, Sequence[Tag]]) -> List[str]:
        """Item texts of every list under ``nodes``; sub-lists follow their parent item."""

        if isinstance(nodes, Tag):
            nodes = [nodes]

        items: List[str] = []
        for node in nodes:
            if node.name in LIST_TAGS:
                items.extend(self._walk_list(node))
                continue

            for lst in self._outermost_lists(node):
                items.extend(self._walk_list(lst))

        return items

    # tables

    def table_grid(self, table: Tag) -> List[Cell]:
        """Cells of ``table`` with row and column spans expanded."""

        grid: dict[Tuple[int, int], Cell] = {}
        rows = [row for row in table.find_all("tr") if row.find_parent("table") is table]
        for r, row in enumerate(rows):
            c = 0
            for cell in row.find_all(("th", "td"), recursive=False):
                while (r, c) in grid:
                    c += 1

                rowspan, colspan = _span(cell, "rowspan"), _span(cell, "colspan")
                text = self.text(cell)
                for dr in range(rowspan):
                    for dc in range(colspan):
                        grid.setdefault(
                            (r + dr, c + dc),
                            Cell(r + dr, c + dc, text, cell.name == "th"),
                        )

                c += colspan

        return [grid[key] for key in sorted(grid)]

    def table_cells(self, table: Tag) -> List[Tuple[int, int, str]]:
        return [(cell.row, cell.col, cell.text) for cell in self.table_grid(table)]

    def select_tables(self, selectors: Iterable[str]) -> List[Tag]:
        """Tables matched by the first selector that matches anything."""

        for selector in selectors:
            tables = [tag for tag in self.soup.select(selector) if tag.name == "table"]
            if tables:
                return tables

        return []
