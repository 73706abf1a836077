"""Tests for describe_text_quote."""

import pytest

from textanchor.chunker import ChunkRange, iter_chunks
from textanchor.errors import AmbiguousTargetError, InvalidSelectorError
from textanchor.selectors import TextPositionSelector, TextQuoteSelector
from textanchor.sources import TextChunkSource
from textanchor.text_position import resolve_text_position
import textanchor.text_quote.describe as describe_module
from textanchor.text_quote import describe_text_quote, match_text_quote


def target_at(source: TextChunkSource, start: int, end: int) -> ChunkRange:
    return resolve_text_position(TextPositionSelector(start=start, end=end), source())


class TestMinimality:
    """Context is only added when needed."""

    def test_unique_text_needs_no_context(self) -> None:
        source = TextChunkSource(["the quick ", "brown fox"])
        selector = describe_text_quote(target_at(source, 4, 9), source)

        assert selector == TextQuoteSelector(exact="quick", prefix="", suffix="")

    def test_exact_joins_chunks(self) -> None:
        source = TextChunkSource(["the qu", "i", "ck brown fox"])
        selector = describe_text_quote(target_at(source, 4, 15), source)

        assert selector.exact == "quick brown"
        assert selector.prefix == ""
        assert selector.suffix == ""


class TestHelloWorld:
    """Describing "World" in "Hello ", "World", "! Hello World!"."""

    def test_first_world_gets_a_suffix(self, hello_world) -> None:
        chunk = hello_world.chunks[1]
        selector = describe_text_quote(ChunkRange(chunk, 0, chunk, 5), hello_world)

        # A prefix cannot help: the first "World" has only "Hello " before it
        assert selector.exact == "World"
        assert selector.prefix == ""
        assert selector.suffix == "! "

    def test_selector_resolves_to_target_only(self, hello_world) -> None:
        chunk = hello_world.chunks[1]
        target = ChunkRange(chunk, 0, chunk, 5)
        selector = describe_text_quote(target, hello_world)

        assert list(match_text_quote(selector, iter_chunks(hello_world()))) == [target]

    def test_second_world_gets_a_prefix(self, hello_world) -> None:
        chunk = hello_world.chunks[2]
        selector = describe_text_quote(ChunkRange(chunk, 8, chunk, 13), hello_world)

        # Only "!" follows it, and the first "World" is followed by "!" too
        assert selector.prefix == " Hello "
        assert selector.suffix == ""

    def test_equivalent_boundary_points_give_same_selector(self, hello_world) -> None:
        chunks = hello_world.chunks
        at_chunk_end = ChunkRange(chunks[0], 6, chunks[2], 0)
        selector = describe_text_quote(at_chunk_end, hello_world)

        assert selector == TextQuoteSelector(exact="World", suffix="! ")


class TestGreedyRounds:
    """Each round rules out the first other match with the least context."""

    def test_tie_prefers_prefix(self) -> None:
        source = TextChunkSource(["xay zaw"])
        selector = describe_text_quote(target_at(source, 1, 2), source)

        assert selector.prefix == "x"
        assert selector.suffix == ""

    def test_tie_policy_can_be_switched(self, monkeypatch) -> None:
        monkeypatch.setattr(describe_module, "PREFER_PREFIX_ON_TIE", False)
        source = TextChunkSource(["xay zaw"])
        selector = describe_text_quote(target_at(source, 1, 2), source)

        assert selector.prefix == ""
        assert selector.suffix == "y"

    def test_prefix_and_suffix_both_needed(self) -> None:
        source = TextChunkSource(["1a2 ", "1a3 ", "4a3"])
        selector = describe_text_quote(target_at(source, 5, 6), source)

        # Round 1 rules out "1a2" with suffix "3"; round 2 rules out "4a3"
        # with prefix "1", which beats suffix "3 "
        assert selector == TextQuoteSelector(exact="a", prefix="1", suffix="3")

    def test_prefix_walk_stops_at_scope_start_of_other_match(self) -> None:
        source = TextChunkSource(["ab", "cab"])
        selector = describe_text_quote(target_at(source, 3, 5), source)

        # Before the other "ab" lies the start of the scope
        assert selector == TextQuoteSelector(exact="ab", prefix="c")

    def test_surrogate_pairs_are_never_split(self) -> None:
        pair = "\ud83d\ude00"
        source = TextChunkSource(["x" + pair[0], pair[1] + "ab ", pair + "ab"])
        selector = describe_text_quote(target_at(source, 6, 8), source)

        assert selector.exact == "ab"
        assert selector.prefix == " " + pair


class TestRoundTrip:
    """describe then match yields exactly the target."""

    @pytest.mark.parametrize(
        "texts",
        [
            ["the cat and the hat and the cat"],
            ["the cat ", "and the ", "hat and ", "the cat"],
            ["th", "e cat and the hat", "", " and the c", "at"],
        ],
    )
    def test_every_short_span(self, texts, positions) -> None:
        source = TextChunkSource(texts)
        length = len(source.text)
        for start in range(length):
            for end in range(start + 1, min(start + 4, length) + 1):
                selector = describe_text_quote(target_at(source, start, end), source)
                matches = list(match_text_quote(selector, iter_chunks(source())))

                assert [positions(source, m) for m in matches] == [(start, end)]
                assert selector.exact == source.text[start:end]


class TestErrors:
    """Failures are reported, never retried."""

    def test_empty_target_is_invalid(self, hello_world) -> None:
        chunk = hello_world.chunks[1]
        with pytest.raises(InvalidSelectorError):
            describe_text_quote(ChunkRange(chunk, 2, chunk, 2), hello_world)

    def test_reversed_target_is_invalid(self, hello_world) -> None:
        chunk = hello_world.chunks[1]
        with pytest.raises(InvalidSelectorError):
            describe_text_quote(ChunkRange(chunk, 3, chunk, 1), hello_world)

    def test_raises_when_no_context_helps(self, monkeypatch, hello_world) -> None:
        monkeypatch.setattr(describe_module, "_context_needed", lambda *args, **kwargs: None)
        chunk = hello_world.chunks[1]

        with pytest.raises(AmbiguousTargetError) as exc_info:
            describe_text_quote(ChunkRange(chunk, 0, chunk, 5), hello_world)

        assert exc_info.value.selector.exact == "World"
        assert exc_info.value.match.start_chunk is hello_world.chunks[2]
