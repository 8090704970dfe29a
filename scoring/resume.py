"""
Resume text model: section segmentation and experience inference.
"""
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

SECTION_NAMES = ('summary', 'experience', 'education', 'skills', 'other')

# Checked in order; the first heading word found in a line wins
HEADING_KEYWORDS = ('experience', 'education', 'skills', 'summary')

YEARS_PATTERN = re.compile(r'(\d+)\+?\s+years?', re.IGNORECASE)

WORDS_PER_YEAR = 120


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def parse_sections(text: str) -> Dict[str, Tuple[str, ...]]:
    """
    Split resume text into section buckets using line-level heading detection.

    The cursor starts at "summary". A line mentioning a heading word moves the
    cursor before the line is stored, so headings land in their own bucket.
    Blank lines are dropped.

    Args:
        text: Raw resume text

    Returns:
        Mapping of section name to ordered, trimmed lines
    """
    buckets = {name: [] for name in SECTION_NAMES}
    current = 'summary'

    for line in re.split(r'\r?\n', text or ''):
        clean = line.strip()
        if not clean:
            continue
        lowered = clean.lower()
        for heading in HEADING_KEYWORDS:
            if heading in lowered:
                current = heading
                break
        buckets[current].append(clean)

    return {name: tuple(lines) for name, lines in buckets.items()}


def detect_years_of_experience(text: str) -> int:
    """
    Estimate years of experience.

    Uses the largest "<n> years" mention; without one, falls back to one year
    per 120 words (rounded half up, minimum 1).
    """
    text = text or ''
    values = []
    for match in YEARS_PATTERN.finditer(text):
        try:
            values.append(int(match.group(1)))
        except ValueError:
            continue

    if values:
        return max(1, max(values))

    return max(1, int(math.floor(count_words(text) / WORDS_PER_YEAR + 0.5)))


@dataclass(frozen=True)
class ResumeDocument:
    """One revision of the resume text with everything derived from it."""
    text: str
    word_count: int = 0
    sections: Dict[str, Tuple[str, ...]] = field(default_factory=dict, compare=False)
    experience_years: int = 1

    @classmethod
    def from_text(cls, text: str) -> "ResumeDocument":
        text = text or ''
        document = cls(
            text=text,
            word_count=count_words(text),
            sections=parse_sections(text),
            experience_years=detect_years_of_experience(text),
        )
        section_sizes = {name: len(lines) for name, lines in document.sections.items()}
        logger.debug(
            f"Parsed resume: {document.word_count} words, "
            f"~{document.experience_years} yrs, sections={section_sizes}"
        )
        return document

    @property
    def lower_text(self) -> str:
        return self.text.lower()

    def preview(self, section: str, limit: int) -> Tuple[str, ...]:
        """First ``limit`` lines of a section."""
        return self.sections.get(section, ())[:limit]
