"""Unit tests for narrative signal detection."""

from pathlib import Path

from tiktokmcp.signals import VOCABULARY, analyze_signals, count_hashtags, load_vocabulary


class TestAnalyzeSignals:
    def test_hits_in_vocabulary_order(self) -> None:
        # "did you know" comes after "wait for it" in the hook list.
        s = analyze_signals("Did you know?", "ok wait for it")
        assert s.hook_hits == ("wait for it", "did you know")

    def test_case_insensitive(self) -> None:
        s = analyze_signals("FOLLOW FOR MORE", "")
        assert s.cta_hits == ("follow for more",)

    def test_substring_matching_without_word_boundaries(self) -> None:
        s = analyze_signals("the multiplier effect", "")
        assert "tip" in s.hook_hits

    def test_retention_cues(self) -> None:
        s = analyze_signals("", "First crack the eggs, then whisk. Finally bake.")
        assert s.retention_hits == ("first", "then", "finally")

    def test_no_hits(self) -> None:
        s = analyze_signals("", "No subtitle available")
        assert s.hook_hits == ()
        assert s.cta_hits == ()
        assert s.retention_hits == ()

    def test_idempotent(self) -> None:
        before = VOCABULARY
        a = analyze_signals("wait for it #x", "link in bio, step one")
        b = analyze_signals("wait for it #x", "link in bio, step one")
        assert a == b
        assert VOCABULARY == before


class TestHashtags:
    def test_counted_in_description_only(self) -> None:
        s = analyze_signals("#fun #cats", "#not #counted #here")
        assert s.hashtag_count == 2

    def test_case_preserved_pattern(self) -> None:
        assert count_hashtags("#Fun #CATS plain # alone") == 2

    def test_none(self) -> None:
        assert count_hashtags("") == 0


class TestLoadVocabulary:
    def test_bundled_lists(self) -> None:
        assert VOCABULARY.hooks[0] == "wait for it"
        assert VOCABULARY.ctas[0] == "follow for more"
        assert VOCABULARY.retention[-1] == "challenge"
        assert len(VOCABULARY.hooks) == 15
        assert len(VOCABULARY.ctas) == 7
        assert len(VOCABULARY.retention) == 8

    def test_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yml"
        path.write_text("hooks:\n  - Big News\nctas:\n  - tap\n")
        vocab = load_vocabulary(path)
        assert vocab.hooks == ("big news",)
        assert vocab.ctas == ("tap",)
        assert vocab.retention == ()

        s = analyze_signals("BIG NEWS today", "", vocabulary=vocab)
        assert s.hook_hits == ("big news",)
