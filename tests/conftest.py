"""Pytest configuration and shared fixtures."""
import pytest
from typing import Any, Callable, Dict, Optional

from germanwiki.scraper import MarkupTree, PageResolver
from germanwiki.shared import UpstreamUnavailable


HAUS_HTML = """
<div class="mw-parser-output">
<div class="mw-heading mw-heading2"><h2 id="Haus_(Deutsch)">Haus (<a href="/wiki/Deutsch">Deutsch</a>)</h2><span class="mw-editsection">[<a>Bearbeiten</a>]</span></div>
<div class="mw-heading mw-heading3"><h3 id="Substantiv,_n">Substantiv, <i>n</i></h3></div>
<table class="wikitable float-right inflection-table">
<tbody>
<tr><th>Kasus</th><th>Singular</th><th>Plural</th></tr>
<tr><th>Nominativ</th><td>das <a href="/wiki/Haus">Haus</a></td><td>die Häuser</td></tr>
<tr><th>Genitiv</th><td>des Hauses<br/>des Haus<sup>1</sup></td><td>der Häuser</td></tr>
<tr><th>Dativ</th><td>dem Haus<br/>dem Hause</td><td>den Häusern</td></tr>
<tr><th>Akkusativ</th><td>das Haus</td><td>die Häuser</td></tr>
</tbody>
</table>
<p title="Trennungsmöglichkeiten am Zeilenumbruch">Worttrennung:
</p>
<dl><dd>Haus, <i>Plural:</i> Häu·ser</dd></dl>
<p title="Aussprache">Aussprache:
</p>
<dl>
<dd><a href="/wiki/Hilfe:IPA">IPA</a>: [<span class="ipa">haus</span>], <i>Plural:</i> [<span class="ipa">ˈhɔɪzɐ</span>]</dd>
<dd><a href="/wiki/Hilfe:Hörbeispiele">Hörbeispiele</a>: <span>Haus</span></dd>
</dl>
<p title="Sinn und Bezeichnetes (Semantik)">Bedeutungen:
</p>
<dl>
<dd>[1] <a href="/wiki/Gebäude">Gebäude</a>, das Menschen als Wohnung dient
<dl><dd>[1a] Wohnhaus einer <i>Familie</i></dd></dl>
</dd>
<dd>[2] Familie, Dynastie<sup class="reference"><a href="#cite_note-1">[1]</a></sup></dd>
</dl>
<p title="Etymologie und Morphologie">Herkunft:
</p>
<dl><dd>mittelhochdeutsch, althochdeutsch <i>hūs</i></dd></dl>
<p title="bedeutungsgleich gebrauchte Wörter">Synonyme:
</p>
<dl>
<dd>[1] <a href="/wiki/Gebäude">Gebäude</a></dd>
<dd>[2] <a href="/wiki/Dynastie">Dynastie</a></dd>
</dl>
<p title="Verwendungsbeispielsätze">Beispiele:
</p>
<dl>
<dd>[1] „Das <b>Haus</b> ist groß.“<sup class="reference"><a>[2]</a></sup></dd>
<dd>[2] „Das Haus Habsburg herrschte lange.“</dd>
</dl>
<p title="Phraseologismen">Redewendungen:
</p>
<dl><dd>das Haus hüten</dd></dl>
<p title="Kollokationen">Charakteristische Wortkombinationen:
</p>
<dl>
<dd>[1] ein Haus bauen</dd>
<dd>[1] ein Haus kaufen</dd>
</dl>
<div class="mw-heading mw-heading4"><h4 id="Übersetzungen">Übersetzungen</h4></div>
<table class="wikitable"><tbody><tr><td>
<ul>
<li>Englisch: [1] <a>house</a>; [2] <a>house</a></li>
<li>Französisch: [1] <a>maison</a><sup>→ fr</sup> f, <a>bâtiment</a> m</li>
</ul>
</td><td>
<ul>
<li>Italienisch: [1] <a>casa</a> f</li>
</ul>
</td></tr></tbody></table>
<p title="Quellen">Referenzen und weiterführende Informationen:
</p>
<dl><dd>[1] Wikipedia-Artikel „Haus“</dd></dl>
</div>
"""

MACHEN_HTML = """
<div class="mw-parser-output">
<h2 id="machen_(Deutsch)">machen (Deutsch)</h2>
<h3 id="Verb">Verb</h3>
<table class="wikitable inflection-table">
<tr><th colspan="2">Person</th><th>Wortform</th></tr>
<tr><th>Präsens</th><th>ich</th><td>mache</td></tr>
</table>
<p>Worttrennung:</p>
<dl><dd>ma·chen, <i>Präteritum:</i> mach·te</dd></dl>
<p>Bedeutungen:</p>
<dl><dd>[1] etwas herstellen</dd></dl>
</div>
"""

FLEXION_MACHEN_HTML = """
<div class="mw-parser-output">
<h2 id="Flexion_von_machen">Flexion von machen</h2>
<table class="wikitable">
<tr><th colspan="2">Präsens</th></tr>
<tr><th>ich</th><td>mache (Flexionsseite)</td></tr>
<tr><th>du</th><td>machst</td></tr>
</table>
<table class="wikitable">
<tr><th colspan="3">Präteritum</th></tr>
<tr><th>Person</th><th>Indikativ</th><th>Konjunktiv II</th></tr>
<tr><th>ich</th><td>machte</td><td>machte</td></tr>
<tr><th>du</th><td>machtest</td><td>—</td></tr>
</table>
</div>
"""


class FakeWiki:
    """Answers action API queries from an in-memory set of pages."""

    def __init__(self) -> None:
        self.pages: Dict[int, tuple] = {}
        self.calls: list = []
        self.error: Optional[Exception] = None
        self.handlers: Dict[str, Callable[[dict], dict]] = {}

    def add(self, pageid: int, title: str, markup: str = "") -> None:
        self.pages[pageid] = (title, markup)

    def fail_with(self, status: Optional[int] = None, status_text: Optional[str] = None) -> None:
        self.error = UpstreamUnavailable(
            "The upstream wiki answered with an error.",
            status=status,
            status_text=status_text,
        )

    async def query(self, **params: Any) -> dict:
        self.calls.append(params)
        if self.error is not None:
            raise self.error

        action = params["action"]
        if action in self.handlers:
            return self.handlers[action](params)

        if action == "query":
            prefix = params["gpssearch"]
            matches = [
                (pageid, title)
                for pageid, (title, _) in self.pages.items()
                if title.startswith(prefix)
            ][: params["gpslimit"]]
            if not matches:
                return {"batchcomplete": ""}

            return {
                "batchcomplete": "",
                "query": {
                    "pages": {
                        str(pageid): {"pageid": pageid, "ns": 0, "title": title, "index": rank}
                        for rank, (pageid, title) in enumerate(matches, start=1)
                    }
                },
            }

        page = self.pages.get(int(params["pageid"]))
        if page is None:
            return {"error": {"code": "nosuchpageid", "info": "There is no page with ID."}}

        title, markup = page
        return {"parse": {"title": title, "pageid": int(params["pageid"]), "text": {"*": markup}}}


@pytest.fixture
def wiki():
    """An upstream wiki holding the entries used across the tests."""
    fake = FakeWiki()
    fake.add(12345, "Haus", HAUS_HTML)
    fake.add(777, "machen", MACHEN_HTML)
    fake.add(778, "Flexion:machen", FLEXION_MACHEN_HTML)
    return fake


@pytest.fixture
def resolver(wiki):
    return PageResolver(wiki)


@pytest.fixture
def haus():
    return MarkupTree(HAUS_HTML)


@pytest.fixture
def machen():
    return MarkupTree(MACHEN_HTML)


@pytest.fixture
def flexion_machen():
    return MarkupTree(FLEXION_MACHEN_HTML)
