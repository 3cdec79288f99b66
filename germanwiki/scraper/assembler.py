from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from loguru import logger

from germanwiki.shared.formatter import shorten

from .config import LabelConfig, load_labels
from .models import LexicalEntry, SectionResult
from .sections import SectionExtractor, VerbInflection, build_extractors
from .tree import MarkupTree

Markup = Union[MarkupTree, str, None]


def merge_inflection(
    primary: Optional[Dict[str, str]], secondary: Dict[str, str]
) -> Dict[str, str]:
    """Add the secondary forms to the primary ones; the entry page wins on conflict."""

    merged = dict(primary or {})
    for key, value in secondary.items():
        merged.setdefault(key, value)

    return merged


class EntryAssembler:
    extractors: List[SectionExtractor]
    verb_inflection: SectionExtractor

    def __init__(
        self,
        extractors: Optional[Sequence[SectionExtractor]] = None,
        config: Optional[LabelConfig] = None,
    ) -> None:
        config = config or load_labels()
        self.extractors = list(extractors) if extractors is not None else build_extractors(config)
        self.verb_inflection = VerbInflection(config.section(VerbInflection.key))

    def __repr__(self) -> str:
        return f"<EntryAssembler sections={[extractor.key for extractor in self.extractors]}>"

    def run(
        self,
        extractor: SectionExtractor,
        tree: MarkupTree,
        title: str,
        diagnostics: List[str],
    ) -> SectionResult:
        """Run one extractor; a failure only costs its own section."""

        try:
            return extractor.extract(tree)
        except Exception as exc:
            logger.exception(
                "Couldn't extract {} from {}", extractor.key, shorten(title, 42)
            )
            diagnostics.append(f"{extractor.key}: {type(exc).__name__}: {exc}")
            return SectionResult.absent()

    def assemble(
        self,
        pageid: int,
        title: str,
        primary_tree: Markup,
        secondary_tree: Markup = None,
    ) -> LexicalEntry:
        if not isinstance(primary_tree, MarkupTree):
            primary_tree = MarkupTree(primary_tree)

        fields: Dict[str, Any] = {}
        diagnostics: List[str] = []
        for extractor in self.extractors:
            result = self.run(extractor, primary_tree, title, diagnostics)
            if result.present:
                fields[extractor.key] = result.value

        if secondary_tree is not None:
            if not isinstance(secondary_tree, MarkupTree):
                secondary_tree = MarkupTree(secondary_tree)

            result = self.run(self.verb_inflection, secondary_tree, title, diagnostics)
            if result.present:
                fields["inflection"] = merge_inflection(fields.get("inflection"), result.value)

        logger.debug(
            "Assembled {} with sections {}", shorten(title, 42), list(fields) or "none"
        )
        return LexicalEntry(pageid=pageid, title=title, diagnostics=diagnostics, **fields)


def assemble(
    pageid: int,
    title: str,
    primary_tree: Markup,
    secondary_tree: Markup = None,
) -> LexicalEntry:
    return EntryAssembler().assemble(pageid, title, primary_tree, secondary_tree)
