from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from bs4 import Tag

from germanwiki.scraper.tree import Cell, MarkupTree

from .base import SectionExtractor

MISSING = {"", "—", "–", "-", "…", "?"}


def _dedupe(labels: Iterable[str]) -> List[str]:
    result: List[str] = []
    for label in labels:
        if label and (not result or result[-1] != label):
            result.append(label)

    return result


def inflection_mapping(cells: List[Cell]) -> Dict[str, str]:
    """
    Key every data cell of a table by its row and column headers.

    Row labels are the header cells left of the data cell. A header-only row
    spanning the table with one text (``Präsens``) prefixes the rows below it.
    Other header-only rows label columns; column labels are only used when the
    rows under them have more than one distinctly labelled data column, so a
    table with a single ``Wortform`` column yields keys like ``Präsens_ich``.
    """

    rows: Dict[int, Dict[int, Cell]] = defaultdict(dict)
    for cell in cells:
        rows[cell.row][cell.col] = cell

    # (group, column labels, data rows) per block of rows sharing a header
    blocks: List[Tuple[str, Dict[int, List[str]], List[Dict[int, Cell]]]] = []
    group, columns, pending_header = "", {}, False
    for index in sorted(rows):
        row = rows[index]
        if all(cell.header for cell in row.values()):
            texts = {cell.text for cell in row.values()}
            if len(row) > 1 and len(texts) == 1:
                group, pending_header = texts.pop(), False
                continue

            if not pending_header:
                columns = defaultdict(list)
                pending_header = True

            for col, cell in row.items():
                columns[col] = _dedupe([*columns[col], cell.text])

            continue

        pending_header = False
        if not blocks or blocks[-1][0] != group or blocks[-1][1] is not columns:
            blocks.append((group, columns, []))

        blocks[-1][2].append(row)

    mapping: Dict[str, str] = {}
    for group, columns, data_rows in blocks:
        data_cols = {col for row in data_rows for col, cell in row.items() if not cell.header}
        use_columns = len({tuple(columns.get(col, [])) for col in data_cols}) > 1

        for row in data_rows:
            row_labels: List[str] = []
            for col in sorted(row):
                cell = row[col]
                if cell.header:
                    row_labels.append(cell.text)
                    continue

                if cell.text in MISSING:
                    continue

                parts = _dedupe(
                    [group, *row_labels, *(columns.get(col, []) if use_columns else [])]
                )
                if parts:
                    mapping.setdefault("_".join(parts), cell.text)

    return mapping


class Inflection(SectionExtractor[Dict[str, str]]):
    """The declension or conjugation overview table of the entry page."""

    key = "inflection"

    def locate(self, tree: MarkupTree) -> Optional[List[Tag]]:
        tables = tree.select_tables(self.labels.tables)
        return tables[:1] or None

    def parse(self, tree: MarkupTree, nodes: List[Tag]) -> Dict[str, str]:
        mapping: Dict[str, str] = {}
        for table in nodes:
            for key, value in inflection_mapping(tree.table_grid(table)).items():
                mapping.setdefault(key, value)

        return mapping


class VerbInflection(Inflection):
    """Every conjugation table of a ``Flexion:`` page; earlier tables win on conflict."""

    key = "verbInflection"

    def locate(self, tree: MarkupTree) -> Optional[List[Tag]]:
        return tree.select_tables(self.labels.tables) or None
