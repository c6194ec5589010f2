"""Tests for reading the music section of ytInitialData."""

import pytest

from y2search.core.models import CandidateSource
from y2search.core.structured_metadata import (
    StructuredMetadataReader,
    clean_song_text,
    dig,
    fix_compatibility_ideographs,
    text_of,
    try_read,
)


class TestHelpers:
    def test_dig(self):
        node = {"a": [{"b": "x"}]}
        assert dig(node, "a", 0, "b") == "x"
        assert dig(node, "a", 1, "b") is None
        assert dig(node, "a", "b") is None
        assert dig("text", "a") is None

    def test_text_of_simple_text(self):
        assert text_of({"simpleText": "Song"}) == "Song"

    def test_text_of_single_run(self):
        assert text_of({"runs": [{"text": "Song"}]}) == "Song"

    def test_text_of_joins_runs(self):
        assert text_of({"runs": [{"text": "Song "}, {"text": "Title"}]}) == "Song Title"

    @pytest.mark.parametrize(
        "node",
        [None, {}, {"runs": []}, {"runs": "Song"}, {"runs": [{"text": 3}]}, {"simpleText": 3}],
    )
    def test_text_of_malformed(self, node):
        assert text_of(node) is None

    def test_fix_compatibility_ideographs(self):
        assert fix_compatibility_ideographs("\uf914") == "\u6a02"
        assert fix_compatibility_ideographs("Song") == "Song"

    def test_clean_song_text(self):
        assert clean_song_text("  Song   Title 🎵 ") == "Song Title"
        assert clean_song_text("Love Story (Taylor's Version)") == "Love Story (Taylor's)"
        assert clean_song_text("Song (Remix)") == "Song (Remix)"


class TestTryRead:
    def test_single_song(self, single_song_data):
        candidate = try_read(single_song_data)
        assert candidate.artist == "Artist Name"
        assert candidate.song == "Song Title"
        assert candidate.source == CandidateSource.STRUCTURED

    def test_runs_text(self, make_initial_data, make_lockup, runs_text):
        data = make_initial_data([make_lockup(runs_text("Song ", "Title"), runs_text("Artist"))])
        candidate = try_read(data)
        assert (candidate.artist, candidate.song) == ("Artist", "Song Title")

    def test_several_songs_is_no_answer(self, make_initial_data, make_lockup):
        data = make_initial_data(
            [make_lockup("First", "Artist A"), make_lockup("Second", "Artist B")]
        )
        assert try_read(data) is None

    def test_empty_section(self, make_initial_data):
        assert try_read(make_initial_data([])) is None

    @pytest.mark.parametrize(
        "structured",
        [
            None,
            {},
            [],
            "ytInitialData",
            {"engagementPanels": "oops"},
            {"engagementPanels": [{"engagementPanelSectionListRenderer": None}]},
            {
                "engagementPanels": [
                    {
                        "engagementPanelSectionListRenderer": {
                            "content": {
                                "structuredDescriptionContentRenderer": {
                                    "items": {"videoDescriptionMusicSectionRenderer": {}}
                                }
                            }
                        }
                    }
                ]
            },
        ],
    )
    def test_malformed_shapes(self, structured):
        assert try_read(structured) is None

    def test_missing_artist_row(self, make_initial_data, simple_text):
        lockup = {
            "carouselLockupRenderer": {
                "infoRows": [{"infoRowRenderer": {"defaultMetadata": simple_text("Song")}}]
            }
        }
        assert try_read(make_initial_data([lockup])) is None

    def test_expanded_metadata_used_when_default_missing(self, make_initial_data, simple_text):
        lockup = {
            "carouselLockupRenderer": {
                "infoRows": [
                    {"infoRowRenderer": {"expandedMetadata": simple_text("Song")}},
                    {"infoRowRenderer": {"defaultMetadata": simple_text("Artist")}},
                ]
            }
        }
        candidate = try_read(make_initial_data([lockup]))
        assert (candidate.artist, candidate.song) == ("Artist", "Song")

    def test_song_cleanup_applied(self, make_initial_data, make_lockup):
        data = make_initial_data([make_lockup("\uf914 Song 🎶 (Live Version)", " DJ 🎧 ")])
        candidate = try_read(data)
        assert candidate.song == "\u6a02 Song (Live)"
        assert candidate.artist == "DJ 🎧"

    def test_emoji_only_song_is_no_answer(self, make_initial_data, make_lockup):
        assert try_read(make_initial_data([make_lockup("🎶", "Artist")])) is None


class TestReader:
    def test_attempt_wraps_candidate(self, single_song_data):
        attempt = StructuredMetadataReader().attempt("ignored", single_song_data)
        assert attempt.candidate.song == "Song Title"
        assert attempt.not_loaded is False

    def test_attempt_without_data(self):
        attempt = StructuredMetadataReader().attempt("Artist - Song", None)
        assert attempt.candidate is None
        assert attempt.not_loaded is False
