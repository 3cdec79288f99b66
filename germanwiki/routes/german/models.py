from typing import List

from germanwiki.scraper import PageRef
from germanwiki.shared import BaseModel, Field


class SearchResponse(BaseModel):
    pages: List[PageRef] = Field(default_factory=list)
