"""Tests for entry assembly and inflection merging."""
import pytest
from pydantic import ValidationError

from germanwiki.scraper import EntryAssembler, MarkupTree, SectionResult, assemble, merge_inflection
from germanwiki.scraper.sections import SectionExtractor, build_extractors


class Exploding(SectionExtractor):
    key = "antonyms"

    def parse(self, tree, nodes):
        raise RuntimeError("unexpected node shape")

    def locate(self, tree):
        return []


class TestAssemble:
    """Building a lexical entry from a primary page."""

    def test_page_identity_always_present(self):
        entry = assemble(1, "leer", MarkupTree(""))
        assert entry.payload() == {"pageid": 1, "title": "leer"}

    def test_synonyms_present_antonyms_omitted(self, haus):
        payload = assemble(12345, "Haus", haus).payload()
        assert payload["pageid"] == 12345
        assert payload["title"] == "Haus"
        assert payload["synonyms"] == ["Gebäude", "Dynastie"]
        assert "antonyms" not in payload

    def test_payload_uses_record_names(self, haus):
        payload = assemble(12345, "Haus", haus).payload()
        assert set(payload) == {
            "pageid",
            "title",
            "hyphenation",
            "pronunciation",
            "origin",
            "meanings",
            "synonyms",
            "examples",
            "idioms",
            "wordCombinations",
            "translations",
            "inflection",
        }

    def test_no_empty_values_in_payload(self, haus):
        for key, value in assemble(12345, "Haus", haus).payload().items():
            assert value not in ("", [], {}, None), key

    def test_accepts_raw_markup(self):
        entry = assemble(5, "Baum", "<p>Synonyme:</p><dl><dd>[1] Gehölz</dd></dl>")
        assert entry.synonyms == ["Gehölz"]

    def test_entry_is_immutable(self, haus):
        entry = assemble(12345, "Haus", haus)
        with pytest.raises(ValidationError):
            entry.title = "Hütte"

    def test_failing_extractor_only_drops_its_section(self, haus):
        extractors = [*build_extractors()[:-1], Exploding()]
        entry = EntryAssembler(extractors=extractors).assemble(12345, "Haus", haus)
        assert entry.synonyms == ["Gebäude", "Dynastie"]
        assert entry.antonyms is None
        assert entry.diagnostics == ["antonyms: RuntimeError: unexpected node shape"]
        assert "diagnostics" not in entry.payload()

    def test_assembly_is_repeatable(self, haus):
        assembler = EntryAssembler()
        assert assembler.assemble(1, "Haus", haus) == assembler.assemble(1, "Haus", haus)


class TestInflectionMerge:
    """Merging secondary page conjugation into the primary inflection."""

    def test_disjoint_keys_give_union(self):
        assert merge_inflection({"a": "1"}, {"b": "2"}) == {"a": "1", "b": "2"}

    def test_primary_wins_on_overlap(self):
        assert merge_inflection({"a": "1"}, {"a": "x", "b": "2"}) == {"a": "1", "b": "2"}

    def test_missing_primary_takes_secondary(self):
        assert merge_inflection(None, {"b": "2"}) == {"b": "2"}

    def test_merge_does_not_modify_primary(self):
        primary = {"a": "1"}
        merge_inflection(primary, {"b": "2"})
        assert primary == {"a": "1"}

    def test_verb_entry_merges_secondary_page(self, machen, flexion_machen):
        entry = assemble(777, "machen", machen, flexion_machen)
        assert entry.inflection["Präsens_ich"] == "mache"
        assert entry.inflection["Präsens_du"] == "machst"
        assert entry.inflection["Präteritum_ich_Indikativ"] == "machte"

    def test_secondary_becomes_field_without_primary_table(self, flexion_machen):
        entry = assemble(9, "kein Verb", MarkupTree("<p>Bedeutungen:</p>"), flexion_machen)
        assert entry.inflection["Präsens_ich"] == "mache (Flexionsseite)"

    def test_secondary_without_tables_leaves_inflection_alone(self, machen):
        entry = assemble(777, "machen", machen, MarkupTree("<p>leer</p>"))
        assert entry.inflection == {"Präsens_ich": "mache"}

    def test_only_verb_inflection_runs_on_secondary(self, machen):
        secondary = MarkupTree("<p>Synonyme:</p><dl><dd>[1] tun</dd></dl>")
        assert assemble(777, "machen", machen, secondary).synonyms is None


class TestSectionResult:
    """The absent marker and pruning of empty values."""

    @pytest.mark.parametrize("value", [None, "", "   ", [], [""], {}, {"x": []}, {"": ["a"]}])
    def test_empty_values_are_absent(self, value):
        assert not SectionResult.of(value).present

    def test_blank_entries_pruned(self):
        assert SectionResult.of(["a", " ", "b"]).value == ["a", "b"]
        assert SectionResult.of({"en": ["", "house"], "fr": []}).value == {"en": ["house"]}
