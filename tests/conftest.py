import pytest

from scoring.policy import (
    IdentityLabel,
    KeywordSpec,
    MatchingPolicy,
    ScoringPolicy,
)
from scoring.resume import ResumeDocument
from scoring.scorer import ATSScorer

ENV_VARS = (
    'ATS_STRICTNESS', 'ATS_PASS_THRESHOLD', 'ATS_MIN_YEARS', 'ATS_FORMAT_STYLE',
    'ATS_IDENTITY', 'ATS_LOG_LEVEL', 'MAX_FILE_SIZE_MB',
)


def padded_text(head: str, total_words: int) -> str:
    """``head`` followed by filler words up to ``total_words`` words."""
    words = head.split()
    return " ".join(words + ["filler"] * (total_words - len(words)))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scorer():
    return ATSScorer()


@pytest.fixture
def john():
    return IdentityLabel('John', 1.0)


@pytest.fixture
def demetrius():
    return IdentityLabel('Demetrius', 0.11)


@pytest.fixture
def long_document():
    """200 words, one 'React' mention, no explicit years (estimate: 2)."""
    return ResumeDocument.from_text(padded_text("React", 200))


@pytest.fixture
def react_python():
    return KeywordSpec(required=('react', 'python'), preferred=())


@pytest.fixture
def strict():
    return MatchingPolicy(100)


@pytest.fixture
def two_year_policy():
    return ScoringPolicy(min_years=2)
