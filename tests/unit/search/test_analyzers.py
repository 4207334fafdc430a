"""Unit tests for normalization, phrase cleaning and tokenization."""

import pytest

from hymnal_search.search.analyzers import (
    HYMN_STOPWORDS,
    AnalyzerPipeline,
    MinLengthFilter,
    RegexTokenizer,
    StopFilter,
    Token,
    normalize,
    phrase_text,
    tokenize,
)


@pytest.mark.unit
class TestNormalize:
    """normalize() canonicalizes case, diacritics and whitespace."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Amazing Grace", "amazing grace"),
            ("  Café\tau   Lait\n", "cafe au lait"),
            ("ÀÉÎÕÜ ñ", "aeiou n"),
            ("line one\n\nline two", "line one line two"),
        ],
    )
    def test_normalizes(self, raw, expected):
        assert normalize(raw) == expected

    def test_cafe_variants_compare_equal(self):
        assert normalize("café") == normalize("Cafe") == "cafe"

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n\t"])
    def test_empty_input_yields_empty_string(self, raw):
        assert normalize(raw) == ""

    def test_keeps_punctuation(self):
        assert normalize("It is well, with my soul!") == "it is well, with my soul!"


@pytest.mark.unit
class TestPhraseText:
    """phrase_text() keeps only letters, digits and single spaces."""

    def test_strips_punctuation(self):
        assert phrase_text("It is well, with my soul!") == "it is well with my soul"

    def test_collapses_spaces_left_by_punctuation(self):
        assert phrase_text('  "Holy -- holy,   holy"  ') == "holy holy holy"

    def test_folds_diacritics(self):
        assert phrase_text("Noël, Noël") == "noel noel"

    def test_none_is_empty(self):
        assert phrase_text(None) == ""


@pytest.mark.unit
class TestTokenize:
    """tokenize() emits ordered terms with duplicates preserved."""

    def test_preserves_order_and_duplicates(self):
        assert tokenize("Grace, grace, God's grace") == ["grace", "grace", "god", "grace"]

    def test_drops_single_characters(self):
        assert tokenize("x marks 1 spot") == ["marks", "spot"]

    def test_drops_liturgical_interjections(self):
        assert tokenize("Oh Amen, Hallelujah!") == []

    def test_stopword_only_query_is_empty(self):
        assert tokenize("the and of with") == []

    def test_digits_are_terms(self):
        assert tokenize("Psalm 23") == ["psalm", "23"]

    def test_accents_fold_before_splitting(self):
        assert tokenize("Café crème") == ["cafe", "creme"]

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_total_on_empty_input(self, raw):
        assert tokenize(raw) == []

    def test_non_ascii_letters_split_terms(self):
        # "ø" has no decomposition, so it acts as a separator.
        assert tokenize("smørrebrød") == ["sm", "rrebr"]


@pytest.mark.unit
class TestPipeline:
    """The tokenizer/filter pipeline composes in order."""

    def test_regex_tokenizer_emits_offsets(self):
        tokens = list(RegexTokenizer()("joy to the world"))

        assert [t.text for t in tokens] == ["joy", "to", "the", "world"]
        assert [t.position for t in tokens] == [0, 1, 2, 3]
        assert tokens[3].start_char == 11
        assert tokens[3].end_char == 16

    def test_min_length_filter(self):
        raw = [Token("a", 0, 0, 1), Token("ab", 1, 2, 4)]

        assert [t.text for t in MinLengthFilter(2)(raw)] == ["ab"]

    def test_stop_filter_accepts_custom_vocabulary(self):
        raw = [Token("grace", 0, 0, 5), Token("mercy", 1, 6, 11)]

        assert [t.text for t in StopFilter(["Mercy"])(raw)] == ["grace"]

    def test_default_stopwords_include_interjections(self):
        assert {"oh", "amen", "hallelujah", "o"} <= HYMN_STOPWORDS

    def test_pipeline_without_filters_returns_all_tokens(self):
        pipeline = AnalyzerPipeline(RegexTokenizer())

        assert [t.text for t in pipeline("a b")] == ["a", "b"]
