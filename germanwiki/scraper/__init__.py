from .assembler import EntryAssembler, assemble, merge_inflection
from .config import LabelConfig, SectionLabels, load_labels
from .models import LexicalEntry, PageMarkup, PageRef, SectionResult
from .resolution import PageResolver
from .tree import MarkupTree

__all__ = (
    "EntryAssembler",
    "assemble",
    "merge_inflection",
    "LabelConfig",
    "SectionLabels",
    "load_labels",
    "LexicalEntry",
    "PageMarkup",
    "PageRef",
    "SectionResult",
    "PageResolver",
    "MarkupTree",
)
