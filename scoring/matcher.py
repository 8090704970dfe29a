"""
Keyword matching under exact or loose parsing policy.

Real screening systems differ mostly in whether they demand the literal
phrase or allow semantic recall. Both behaviours are modelled as explicit
strategies selected by ``MatchMode``.
"""
import logging
import re
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .policy import MatchingPolicy, MatchMode

logger = logging.getLogger(__name__)

KEYWORD_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    'javascript': ('js',),
    'typescript': ('ts',),
    'react': ('react.js', 'reactjs'),
    'node': ('nodejs',),
    'accessibility': ('a11y', 'inclusive'),
}


def normalize_keyword(keyword: str) -> str:
    return (keyword or '').strip().lower()


def strip_non_word(value: str) -> str:
    return re.sub(r'\W', '', value)


class KeywordMatcher:
    """Resolve keyword presence in one resume text."""

    def __init__(
        self,
        text: str,
        policy: MatchingPolicy,
        synonyms: Optional[Mapping[str, Sequence[str]]] = None
    ):
        """
        Args:
            text: Resume text
            policy: Matching policy (strictness knob)
            synonyms: Synonym table; defaults to KEYWORD_SYNONYMS
        """
        self.policy = policy
        self.lower_text = (text or '').lower()
        self.tokens = frozenset(t for t in re.split(r'\W+', self.lower_text) if t)
        self.synonyms = KEYWORD_SYNONYMS if synonyms is None else synonyms

        self._strategies: Dict[MatchMode, Callable[[str], bool]] = {
            MatchMode.EXACT: self._match_exact,
            MatchMode.LOOSE: self._match_loose,
        }

    def _token_hit(self, normalized: str) -> bool:
        stripped = strip_non_word(normalized)
        return bool(stripped) and stripped in self.tokens

    def _match_exact(self, normalized: str) -> bool:
        """Whole token, or the keyword phrase on word boundaries."""
        if self._token_hit(normalized):
            return True
        pattern = r'\b' + re.escape(normalized) + r'\b'
        return re.search(pattern, self.lower_text) is not None

    def _match_loose(self, normalized: str) -> bool:
        """Whole token, any synonym as a substring, or the keyword as a substring."""
        if self._token_hit(normalized):
            return True
        for synonym in self.synonyms.get(normalized, ()):
            if synonym.lower() in self.lower_text:
                return True
        return normalized in self.lower_text

    def find(self, keyword: str) -> bool:
        normalized = normalize_keyword(keyword)
        if not normalized:
            return False
        return self._strategies[self.policy.mode](normalized)

    def partition(self, keywords: Sequence[str]) -> Tuple[List[str], List[str]]:
        """
        Split keywords into (matched, missing), preserving input order.
        """
        matched, missing = [], []
        for keyword in keywords:
            (matched if self.find(keyword) else missing).append(keyword)
        return matched, missing


def merge_synonyms(extra: Optional[Mapping[str, Sequence[str]]]) -> Dict[str, Tuple[str, ...]]:
    """Extend the built-in synonym table with configured entries."""
    merged = dict(KEYWORD_SYNONYMS)
    if not extra:
        return merged
    if not isinstance(extra, Mapping):
        logger.warning(f"Ignoring malformed synonym table: {extra!r}")
        return merged
    for key, values in extra.items():
        normalized = normalize_keyword(str(key))
        if not normalized:
            continue
        if isinstance(values, str):
            values = [values]
        elif isinstance(values, Mapping) or not isinstance(values, (list, tuple)):
            logger.warning(f"Skipping malformed synonyms for {key!r}: {values!r}")
            continue
        forms = tuple(normalize_keyword(str(v)) for v in values if normalize_keyword(str(v)))
        merged[normalized] = tuple(dict.fromkeys(merged.get(normalized, ()) + forms))
    return merged
