from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import ConfigDict

from germanwiki.shared import BaseModel, Field

T = TypeVar("T")


def prune(value: Any) -> Any:
    """Drop blank strings and empty containers, recursively."""

    if isinstance(value, str):
        return value.strip() or None

    if isinstance(value, list):
        items = [item for item in map(prune, value) if item is not None]
        return items or None

    if isinstance(value, dict):
        mapping = {
            key.strip(): item
            for key, item in ((key, prune(item)) for key, item in value.items())
            if key and key.strip() and item is not None
        }
        return mapping or None

    return value


@dataclass(frozen=True)
class SectionResult(Generic[T]):
    """The outcome of one section extractor: a value or the absent marker."""

    value: Optional[T] = None

    @classmethod
    def of(cls, value: Optional[T]) -> SectionResult[T]:
        return cls(prune(value))

    @classmethod
    def absent(cls) -> SectionResult[T]:
        return cls(None)

    @property
    def present(self) -> bool:
        return self.value is not None

    def __bool__(self) -> bool:
        return self.present


class PageRef(BaseModel):
    pageid: int
    title: str
    ns: Optional[int] = Field(default=None)
    index: Optional[int] = Field(default=None)


class PageMarkup(BaseModel):
    pageid: int
    title: str = Field(default="")
    markup: str = Field(default="")

    @property
    def empty(self) -> bool:
        return not self.markup.strip()


class LexicalEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    pageid: int
    title: str
    hyphenation: Optional[List[str]] = Field(default=None)
    pronunciation: Optional[List[str]] = Field(default=None)
    origin: Optional[str] = Field(default=None)
    meanings: Optional[List[str]] = Field(default=None)
    synonyms: Optional[List[str]] = Field(default=None)
    antonyms: Optional[List[str]] = Field(default=None)
    examples: Optional[List[str]] = Field(default=None)
    idioms: Optional[List[str]] = Field(default=None)
    word_combinations: Optional[List[str]] = Field(
        default=None, alias="wordCombinations"
    )
    translations: Optional[Dict[str, List[str]]] = Field(default=None)
    inflection: Optional[Dict[str, str]] = Field(default=None)
    diagnostics: List[str] = Field(default_factory=list, exclude=True)

    def payload(self) -> Dict[str, Any]:
        """The JSON body for this entry; absent sections are left out."""

        return self.model_dump(by_alias=True, exclude_none=True)
