from __future__ import annotations

from typing import List, Optional, Tuple, Type

from germanwiki.scraper.config import LabelConfig, load_labels

from .base import ListSection, SectionExtractor
from .inflection import Inflection, VerbInflection, inflection_mapping
from .phonetics import Hyphenation, Pronunciation
from .relations import Antonyms, Idioms, Synonyms, WordCombinations
from .senses import Examples, Meanings, Origin
from .translations import Translations

PRIMARY_SECTIONS: Tuple[Type[SectionExtractor], ...] = (
    Hyphenation,
    Pronunciation,
    Meanings,
    Origin,
    Synonyms,
    Antonyms,
    Examples,
    Idioms,
    Translations,
    WordCombinations,
    Inflection,
)


def build_extractors(config: Optional[LabelConfig] = None) -> List[SectionExtractor]:
    """The extractors run against an entry page, in a fixed order."""

    config = config or load_labels()
    return [section(config.section(section.key)) for section in PRIMARY_SECTIONS]


__all__ = (
    "SectionExtractor",
    "ListSection",
    "Hyphenation",
    "Pronunciation",
    "Meanings",
    "Origin",
    "Synonyms",
    "Antonyms",
    "Examples",
    "Idioms",
    "Translations",
    "WordCombinations",
    "Inflection",
    "VerbInflection",
    "PRIMARY_SECTIONS",
    "build_extractors",
    "inflection_mapping",
)
