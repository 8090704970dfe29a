import pytest

from scoring.matcher import KeywordMatcher, merge_synonyms
from scoring.policy import MatchingPolicy, MatchMode


def found(keyword, text, strictness, synonyms=None):
    return KeywordMatcher(text, MatchingPolicy(strictness), synonyms).find(keyword)


class TestExactMatching:

    def test_whole_word_found(self):
        assert found("react", "I used React.", 100)

    def test_prefix_of_longer_word_not_found(self):
        assert not found("react", "I used reaction timing.", 100)

    def test_synonyms_ignored(self):
        assert not found("accessibility", "Championed a11y reviews", 100)

    def test_phrase_on_word_boundaries(self):
        assert found("Inclusive design", "Inclusive design lead for 3 teams", 70)

    def test_punctuated_keyword(self):
        assert found("Node.js", "Built Node.js services", 100)

    def test_punctuation_stripped_for_token_comparison(self):
        assert found("C#", "Languages: c, python", 100)


class TestLooseMatching:

    def test_synonym_hit(self):
        assert found("accessibility", "Championed a11y reviews", 40)

    def test_substring_hit(self):
        assert found("react", "I used reaction timing.", 40)

    def test_not_found(self):
        assert not found("kubernetes", "Docker and AWS", 40)

    def test_configured_synonyms(self):
        synonyms = merge_synonyms({'Python': ['PY', 'cpython']})
        assert synonyms['python'] == ('py', 'cpython')
        assert found("python", "wrote py scripts", 40, synonyms)


class TestMatcherBoundary:

    @pytest.mark.parametrize("strictness,mode", [
        (69, MatchMode.LOOSE),
        (70, MatchMode.EXACT),
        (30, MatchMode.LOOSE),
        (100, MatchMode.EXACT),
    ])
    def test_threshold_selects_mode(self, strictness, mode):
        assert MatchingPolicy(strictness).mode is mode

    @pytest.mark.parametrize("keyword", ["", "   ", None])
    def test_empty_keyword_not_found(self, keyword):
        assert not found(keyword, "anything at all", 40)
        assert not found(keyword, "anything at all", 100)

    def test_partition_keeps_order(self):
        matcher = KeywordMatcher("React and SQL", MatchingPolicy(100))
        matched, missing = matcher.partition(["SQL", "Go", "React", "Rust"])
        assert matched == ["SQL", "React"]
        assert missing == ["Go", "Rust"]


class TestMergeSynonyms:

    def test_extends_existing_entry_without_duplicates(self):
        synonyms = merge_synonyms({'react': ['reactjs', 'preact']})
        assert synonyms['react'] == ('react.js', 'reactjs', 'preact')

    def test_string_value_and_blank_key(self):
        synonyms = merge_synonyms({'golang': 'go', '  ': ['x']})
        assert synonyms['golang'] == ('go',)
        assert '' not in synonyms
