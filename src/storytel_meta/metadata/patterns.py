# ABOUTME: Ordered catalog of locale-tagged regexes for series/volume/part markers in titles.
# ABOUTME: Pure data; the stripping sweep that applies it lives in the normalizer.

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PatternRule:
    """One marker pattern, tagged with the locale it was written for."""

    locale: str
    pattern: re.Pattern[str]
    description: str


def _marker(word: str) -> re.Pattern[str]:
    """Build the `<anything>, <Word> <digits>: ` prefix matcher for a marker word."""
    return re.compile(rf"^.*?,\s*{word}\s*\d+:\s*", re.IGNORECASE)


def _rule(locale: str, word: str, meaning: str) -> PatternRule:
    return PatternRule(locale, _marker(word), f'"{word}" ({meaning})')


# Marker words per Storytel region. Order is the sweep order.
LOCALE_PATTERNS: tuple[PatternRule, ...] = (
    # Belgium / Netherlands
    _rule("nl", "Aflevering", "episode"),
    _rule("nl", "Deel", "part"),
    # Brazil
    _rule("pt", "Episódio", "episode"),
    _rule("pt", "Parte", "part"),
    # Bulgaria
    _rule("bg", "епизод", "episode"),
    _rule("bg", "том", "volume"),
    _rule("bg", "част", "part"),
    # Colombia / Spain
    _rule("es", "Episodio", "episode"),
    _rule("es", "Volumen", "volume"),
    # Denmark
    _rule("da", "Afsnit", "episode"),
    _rule("da", "Bind", "volume"),
    _rule("da", "Del", "part"),
    # Egypt / Saudi Arabia / United Arab Emirates
    _rule("ar", "حلقة", "episode"),
    _rule("ar", "مجلد", "volume"),
    _rule("ar", "جزء", "part"),
    # Finland
    _rule("fi", "Jakso", "episode"),
    _rule("fi", "Volyymi", "volume"),
    _rule("fi", "Osa", "part"),
    # France
    _rule("fr", "Épisode", "episode"),
    _rule("fr", "Tome", "volume"),
    _rule("fr", "Partie", "part"),
    # Indonesia
    _rule("id", "Episode", "episode"),
    _rule("id", "Bagian", "part"),
    # Israel
    _rule("he", "פרק", "chapter"),
    _rule("he", "כרך", "volume"),
    _rule("he", "חלק", "part"),
    # India
    _rule("hi", "कड़ी", "episode"),
    _rule("hi", "खण्ड", "volume"),
    _rule("hi", "भाग", "part"),
    # Iceland
    _rule("is", "Þáttur", "episode"),
    _rule("is", "Bindi", "volume"),
    _rule("is", "Hluti", "part"),
    # Poland
    _rule("pl", "Odcinek", "episode"),
    _rule("pl", "Tom", "volume"),
    _rule("pl", "Część", "part"),
    # Sweden
    _rule("sv", "Avsnitt", "episode"),
)

# German-market conventions, including the bare numeric and trailing forms.
# The generic "Title N:" rule comes after the marker-word rules it could shadow.
GERMAN_PATTERNS: tuple[PatternRule, ...] = (
    _rule("de", "Folge", "episode"),
    _rule("de", "Band", "volume"),
    PatternRule("de", re.compile(r"^.*?\s+-\s+\d+:\s*", re.IGNORECASE), '"Title - 1:"'),
    PatternRule("de", re.compile(r"^.*?\s+\d+:\s*", re.IGNORECASE), '"Title 1:"'),
    _rule("de", "Teil", "part"),
    _rule("de", "Volume", "volume"),
    PatternRule(
        "de",
        re.compile(r"\s*\((Ungekürzt|Gekürzt)\)\s*$", re.IGNORECASE),
        "(Unabridged) / (Abridged) suffix",
    ),
    PatternRule("de", re.compile(r",\s*Teil\s+\d+$", re.IGNORECASE), '", Teil N" suffix'),
    PatternRule(
        "de",
        re.compile(r"-\s*.*?(?:Reihe|Serie)\s+\d+$", re.IGNORECASE),
        '"- ... Reihe/Serie N" suffix',
    ),
)

ALL_PATTERNS: tuple[PatternRule, ...] = LOCALE_PATTERNS + GERMAN_PATTERNS


def patterns_for_locale(locale: str) -> tuple[PatternRule, ...]:
    """Return the rules written for one locale tag, in sweep order."""
    return tuple(rule for rule in ALL_PATTERNS if rule.locale == locale)
