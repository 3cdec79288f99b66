from __future__ import annotations

from functools import lru_cache
from os import environ as env
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger
from ujson import loads

from germanwiki.shared import BaseModel, Field

DEFAULT_LABELS = Path(__file__).with_name("labels.json")


class SectionLabels(BaseModel):
    labels: List[str] = Field(default_factory=list)
    tables: List[str] = Field(default_factory=list)
    level: Optional[int] = Field(default=None)


class LabelConfig(BaseModel):
    version: str
    sections: Dict[str, SectionLabels] = Field(default_factory=dict)

    def section(self, key: str) -> SectionLabels:
        return self.sections.get(key) or SectionLabels()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> LabelConfig:
        path = Path(path)
        config = cls.model_validate(loads(path.read_text(encoding="utf-8")))
        logger.debug(
            "Loaded {} section label sets (version {}) from {}",
            len(config.sections),
            config.version,
            path,
        )
        return config


@lru_cache(maxsize=None)
def load_labels(path: Optional[str] = None) -> LabelConfig:
    """The heading label variants, from ``path``, ``GERMANWIKI_LABELS`` or the bundled file."""

    return LabelConfig.from_file(path or env.get("GERMANWIKI_LABELS") or DEFAULT_LABELS)
