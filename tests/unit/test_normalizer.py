# ABOUTME: Unit tests for Storytel title normalization.
# ABOUTME: Validates marker stripping, series-name removal, subtitle splitting, and trimming.

import pytest

from storytel_meta.metadata.normalizer import normalize_title
from storytel_meta.metadata.types import NormalizedTitle


class TestPlainTitles:
    """Titles with no markers, separators, or series."""

    @pytest.mark.parametrize(
        "raw",
        ["The Name of the Rose", "  Dune  ", "Kafka på stranden", "1984"],
    )
    def test_plain_title_is_trimmed_input(self, raw: str) -> None:
        result = normalize_title(raw)
        assert result.title == raw.strip()
        assert result.subtitle is None

    def test_none_title_normalizes_to_empty(self) -> None:
        assert normalize_title(None) == NormalizedTitle(title="", subtitle=None)

    def test_empty_title(self) -> None:
        assert normalize_title("") == NormalizedTitle(title="", subtitle=None)

    def test_normalizing_twice_is_idempotent(self) -> None:
        """A normalized marker-free title doesn't change on a second pass."""
        first = normalize_title("The Name of the Rose")
        second = normalize_title(first.title)
        assert second == first


class TestMarkerStripping:
    """Locale markers are removed before any splitting."""

    def test_volume_marker_with_series(self) -> None:
        """'Series, Band N: Title' keeps the title and uses the series as subtitle."""
        result = normalize_title("Mystery Series, Band 3: The Return", "Mystery Series", "3")
        assert result.title == "The Return"
        assert result.subtitle == "Mystery Series 3"

    def test_episode_marker_without_series(self) -> None:
        result = normalize_title("De Zeven Zussen, Deel 2: De Stormzuster")
        assert result == NormalizedTitle(title="De Stormzuster", subtitle=None)

    def test_unabridged_annotation_removed(self) -> None:
        result = normalize_title("Der Hobbit (Ungekürzt)")
        assert result == NormalizedTitle(title="Der Hobbit", subtitle=None)

    def test_trailing_reihe_removed(self) -> None:
        result = normalize_title("Das Erbe - Eifel-Krimi Reihe 4")
        assert result == NormalizedTitle(title="Das Erbe", subtitle=None)


class TestSeriesHandling:
    """Series name removal and series subtitles."""

    def test_series_subtitle_when_title_lacks_series(self) -> None:
        result = normalize_title("The Return", "Mystery Series", "3")
        assert result == NormalizedTitle(title="The Return", subtitle="Mystery Series 3")

    def test_leading_segment_before_dash_series(self) -> None:
        """'Title - Series' truncates to the segment before the series name."""
        result = normalize_title("The Return - Mystery Series", "Mystery Series", "3")
        assert result == NormalizedTitle(title="The Return", subtitle="Mystery Series 3")

    def test_leading_segment_before_comma_series(self) -> None:
        result = normalize_title("The Return, Mystery Series", "Mystery Series", "3")
        assert result == NormalizedTitle(title="The Return", subtitle="Mystery Series 3")

    def test_series_name_removed_literally(self) -> None:
        """Without a separator, the first occurrence of the name is cut out."""
        result = normalize_title("Mystery Series The Return", "Mystery Series", "3")
        assert result == NormalizedTitle(title="The Return", subtitle="Mystery Series 3")

    def test_series_name_match_is_case_sensitive(self) -> None:
        """A title containing the name in another case is left alone."""
        result = normalize_title("mystery series The Return", "Mystery Series", "3")
        assert result.title == "mystery series The Return"
        assert result.subtitle == "Mystery Series 3"

    def test_series_without_order_is_ignored(self) -> None:
        result = normalize_title("The Return", "Mystery Series", None)
        assert result == NormalizedTitle(title="The Return", subtitle=None)

    def test_empty_series_name_is_ignored(self) -> None:
        result = normalize_title("The Return", "", "3")
        assert result == NormalizedTitle(title="The Return", subtitle=None)

    def test_separator_subtitle_overrides_series_subtitle(self) -> None:
        result = normalize_title("Foundation: The Epic Begins", "Galactic Empire", "1")
        assert result == NormalizedTitle(title="Foundation", subtitle="The Epic Begins")


class TestSubtitleSplitting:
    """':' and '-' separated subtitles."""

    def test_colon_subtitle(self) -> None:
        result = normalize_title("Dune: The Desert Planet")
        assert result == NormalizedTitle(title="Dune", subtitle="The Desert Planet")

    def test_dash_subtitle(self) -> None:
        result = normalize_title("Stormlight - The Way of Kings")
        assert result == NormalizedTitle(title="Stormlight", subtitle="The Way of Kings")

    def test_short_tail_is_not_a_subtitle(self) -> None:
        """Hyphenated titles with a short tail stay intact."""
        result = normalize_title("Catch-22")
        assert result == NormalizedTitle(title="Catch-22", subtitle=None)

    def test_splits_on_first_separator_only(self) -> None:
        result = normalize_title("Atlas: Part One - The Beginning")
        assert result == NormalizedTitle(title="Atlas", subtitle="Part One - The Beginning")

    def test_second_sweep_cleans_split_title(self) -> None:
        """Annotations exposed by the split are removed by the second sweep."""
        result = normalize_title("Der Hobbit (Ungekürzt) - Hin und zurück")
        assert result == NormalizedTitle(title="Der Hobbit", subtitle="Hin und zurück")
