from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from loguru import logger

from germanwiki.shared import WiktionaryClient, executor_function

from .assembler import EntryAssembler
from .models import LexicalEntry, PageMarkup, PageRef
from .tree import MarkupTree

SEARCH_LIMIT = 6
INFLECTION_PREFIX = "Flexion:"


@executor_function
def parse_markup(markup: str) -> MarkupTree:
    return MarkupTree(markup)


class PageResolver:
    """Locates and fetches pages on the upstream wiki, then hands them to the assembler."""

    client: WiktionaryClient
    assembler: EntryAssembler

    def __init__(
        self,
        client: WiktionaryClient,
        assembler: Optional[EntryAssembler] = None,
        search_limit: int = SEARCH_LIMIT,
    ) -> None:
        self.client = client
        self.assembler = assembler or EntryAssembler()
        self.search_limit = search_limit

    def __repr__(self) -> str:
        return f"<PageResolver client={self.client!r}>"

    async def find_candidate_pages(self, query: str) -> List[PageRef]:
        """Pages whose title starts with ``query``, in the order upstream ranks them."""

        if not query.strip():
            return []

        data = await self.client.query(
            action="query",
            generator="prefixsearch",
            gpslimit=self.search_limit,
            gpssearch=query,
        )
        pages: Any = (data.get("query") or {}).get("pages") or []
        if isinstance(pages, dict):
            pages = list(pages.values())

        refs = [
            PageRef.model_validate(page)
            for page in pages
            if isinstance(page, dict) and "pageid" in page
        ]
        return sorted(
            refs, key=lambda ref: ref.index if ref.index is not None else len(refs)
        )

    async def fetch_page_section(
        self, pageid: int, section: Optional[int] = 1
    ) -> PageMarkup:
        """Rendered markup of one section (or the whole page when ``section`` is None)."""

        params: dict[str, Any] = {"action": "parse", "pageid": pageid}
        if section is not None:
            params["section"] = section

        data = await self.client.query(**params)
        parse = data.get("parse")
        if not isinstance(parse, dict):
            logger.warning(
                "Upstream returned no parse result for page {} ({})",
                pageid,
                (data.get("error") or {}).get("code", "unknown"),
            )
            return PageMarkup(pageid=pageid)

        text = parse.get("text") or ""
        if isinstance(text, dict):
            text = text.get("*") or ""

        return PageMarkup(
            pageid=parse.get("pageid") or pageid,
            title=parse.get("title") or "",
            markup=text,
        )

    async def find_inflection_page(self, word: str) -> Optional[PageMarkup]:
        """The ``Flexion:<word>`` page, only when a candidate carries exactly that title."""

        word = word.strip()
        if not word:
            return None

        page_name = f"{INFLECTION_PREFIX}{word}"
        for ref in await self.find_candidate_pages(page_name):
            if ref.title.strip() == page_name:
                logger.debug("Found inflection page {} for {}", ref.pageid, word)
                return await self.fetch_page_section(ref.pageid, section=None)

        return None

    async def load_entry(self, pageid: int) -> LexicalEntry:
        page = await self.fetch_page_section(pageid)

        # the inflection lookup only needs the title, so it runs while the entry is parsed
        lookup = (
            asyncio.create_task(self.find_inflection_page(page.title))
            if page.title
            else None
        )
        try:
            primary = await parse_markup(page.markup)
        except BaseException:
            if lookup:
                lookup.cancel()
            raise

        secondary = None
        inflection_page = await lookup if lookup else None
        if inflection_page and not inflection_page.empty:
            secondary = await parse_markup(inflection_page.markup)

        return self.assembler.assemble(page.pageid, page.title, primary, secondary)
