"""Tests for chunk planning, reassembly and whole-file transcription."""

import pytest

from mediaforge.errors import InvalidInput, MediaProcessingError, ProviderError, ProviderRateLimited
from mediaforge.models.transcript import TranscriptResult
from mediaforge.transcription.chunking import merge_results, plan_chunks, transcribe_whole

from conftest import FakeBackend, make_file, make_result


class TestPlanChunks:
    def test_thirty_mb_splits_in_two(self):
        # 25MB limit minus 1MB margin = 24MB effective
        chunks = plan_chunks(30.0, 600.0, limit_mb=25.0, safety_margin_mb=1.0)
        assert len(chunks) == 2
        assert [c.start for c in chunks] == [0.0, 300.0]
        assert [c.duration for c in chunks] == [300.0, 300.0]

    def test_chunk_count_uses_effective_limit(self):
        assert len(plan_chunks(100.0, 1000.0, limit_mb=25.0, safety_margin_mb=1.0)) == 5
        assert len(plan_chunks(48.0, 1000.0, limit_mb=25.0, safety_margin_mb=1.0)) == 2
        assert len(plan_chunks(48.1, 1000.0, limit_mb=25.0, safety_margin_mb=1.0)) == 3

    def test_chunks_are_contiguous_and_cover_duration(self):
        chunks = plan_chunks(130.0, 3601.7, limit_mb=25.0)
        assert chunks[0].start == 0.0
        for prev, nxt in zip(chunks, chunks[1:]):
            assert nxt.start == pytest.approx(prev.end)
        assert chunks[-1].end == pytest.approx(3601.7)
        assert [c.index for c in chunks] == list(range(len(chunks)))

    def test_margin_not_below_limit_is_rejected(self):
        with pytest.raises(InvalidInput):
            plan_chunks(30.0, 600.0, limit_mb=25.0, safety_margin_mb=25.0)

    def test_unknown_duration_is_a_media_error(self):
        with pytest.raises(MediaProcessingError):
            plan_chunks(30.0, 0.0, limit_mb=25.0)


class TestMergeResults:
    def test_offsets_use_reported_durations(self):
        # Nominal chunk length is 300s but the backend reports 299.5s
        first = make_result([(0.0, 150.0, "one"), (150.0, 299.0, "two")], duration=299.5)
        second = make_result([(0.0, 10.0, "three")], duration=300.2)

        merged = merge_results([first, second])

        assert merged.duration == pytest.approx(599.7)
        assert [s.start for s in merged.segments] == pytest.approx([0.0, 150.0, 299.5])
        assert merged.segments[2].end == pytest.approx(309.5)

    def test_ids_are_contiguous(self):
        results = [
            make_result([(0.0, 1.0, "a"), (1.0, 2.0, "b")], duration=5.0),
            make_result([], duration=5.0),
            make_result([(0.0, 1.0, "c"), (1.0, 2.0, "d"), (2.0, 3.0, "e")], duration=5.0),
        ]
        merged = merge_results(results)
        assert [s.id for s in merged.segments] == [0, 1, 2, 3, 4]

    def test_language_from_first_chunk(self):
        merged = merge_results([
            make_result([(0.0, 1.0, "hola")], language="es"),
            make_result([(0.0, 1.0, "hello")], language="en"),
        ])
        assert merged.language == "es"

    def test_text_joined_with_single_spaces(self):
        merged = merge_results([
            make_result([(0.0, 1.0, "first part")]),
            make_result([], duration=1.0),
            make_result([(0.0, 1.0, "second part")]),
        ])
        assert merged.text == "first part second part"

    def test_word_timings_are_shifted(self):
        merged = merge_results([
            make_result([(0.0, 1.0, "a")], duration=10.0, words=True),
            make_result([(2.0, 3.0, "b")], duration=10.0, words=True),
        ])
        word = merged.segments[1].words[0]
        assert (word.start, word.end) == (12.0, 13.0)

    def test_starts_monotonic(self):
        results = [
            make_result([(0.0, 4.0, "x"), (4.0, 9.5, "y")], duration=10.0)
            for _ in range(4)
        ]
        starts = [s.start for s in merge_results(results).segments]
        assert starts == sorted(starts)

    def test_empty_input(self):
        merged = merge_results([])
        assert merged == TranscriptResult()


class TestTranscribeWhole:
    def test_small_file_makes_one_call(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "short.wav", 10.0)
        expected = make_result([(0.0, 2.0, "hi")])
        backend = FakeBackend([expected])

        result = transcribe_whole(audio, backend, "en", True, splitter=splitter, sleep=sleep)

        assert result == expected
        assert backend.calls == [(audio, "en", True)]
        assert splitter.probed == []
        assert splitter.cuts == []

    def test_file_at_limit_is_not_chunked(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "edge.wav", 25.0)
        backend = FakeBackend([make_result([(0.0, 1.0, "x")])])
        transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)
        assert len(backend.calls) == 1
        assert splitter.cuts == []

    def test_unlimited_backend_is_never_chunked(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "huge.wav", 200.0)
        backend = FakeBackend([make_result([(0.0, 1.0, "x")])], max_file_size_mb=None)
        transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)
        assert len(backend.calls) == 1

    def test_oversized_file_is_chunked_and_merged(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "long.wav", 30.0)
        backend = FakeBackend([
            make_result([(0.0, 100.0, "alpha"), (100.0, 290.0, "beta")], duration=299.0, language="fr"),
            make_result([(5.0, 250.0, "gamma")], duration=301.0, language="de"),
        ])

        result = transcribe_whole(audio, backend, "fr", splitter=splitter, sleep=sleep)

        assert [c.start for c in splitter.cuts] == [0.0, 300.0]
        assert [call[0].name for call in backend.calls] == ["chunk_0.wav", "chunk_1.wav"]
        assert all(call[1] == "fr" for call in backend.calls)
        assert result.language == "fr"
        assert result.duration == pytest.approx(600.0)
        assert result.text == "alpha beta gamma"
        assert [s.id for s in result.segments] == [0, 1, 2]
        assert result.segments[2].start == pytest.approx(304.0)
        assert splitter.discarded == [tmp_path / "chunks" / "chunk_0.wav", tmp_path / "chunks" / "chunk_1.wav"]

    def test_rate_limited_chunk_is_retried(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "long.wav", 30.0)
        backend = FakeBackend([
            make_result([(0.0, 1.0, "a")], duration=300.0),
            ProviderRateLimited("429"),
            make_result([(0.0, 1.0, "b")], duration=300.0),
        ])

        result = transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)

        assert len(backend.calls) == 3
        assert sleep.delays == [2.0]
        assert result.text == "a b"

    def test_chunk_failure_aborts_without_partial_result(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "long.wav", 75.0)
        backend = FakeBackend([
            make_result([(0.0, 1.0, "a")], duration=200.0),
            ProviderError("boom"),
        ])

        with pytest.raises(ProviderError, match="boom"):
            transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)

        # Third chunk never attempted
        assert len(splitter.cuts) == 2
        assert len(backend.calls) == 2


class TestCompressedSource:
    def test_small_mp3_is_sent_as_is(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "short.mp3", 10.0)
        backend = FakeBackend([make_result([(0.0, 1.0, "x")])])
        transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)
        assert splitter.converted == []
        assert backend.calls[0][0] == audio

    def test_oversized_mp3_is_planned_from_wav_size(self, tmp_path, splitter, sleep):
        # 30MB of 128 kbps MP3 is about 60MB as 16 kHz mono PCM
        audio = make_file(tmp_path / "long.mp3", 30.0)
        splitter.wav_size_mb = 60.0
        backend = FakeBackend([make_result([(0.0, 1.0, t)], duration=200.0) for t in "abc"])

        result = transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)

        wav = tmp_path / "chunks" / "long_pcm.wav"
        assert splitter.converted == [audio]
        assert splitter.probed == [wav]
        assert len(splitter.cuts) == 3
        assert result.text == "a b c"
        assert splitter.discarded[-1] == wav

    def test_converted_wav_within_limit_is_sent_whole(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "dense.flac", 30.0)
        splitter.wav_size_mb = 20.0
        backend = FakeBackend([make_result([(0.0, 1.0, "x")])])

        transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)

        wav = tmp_path / "chunks" / "dense_pcm.wav"
        assert backend.calls[0][0] == wav
        assert splitter.cuts == []
        assert splitter.discarded == [wav]

    def test_converted_wav_discarded_on_failure(self, tmp_path, splitter, sleep):
        audio = make_file(tmp_path / "long.m4a", 30.0)
        backend = FakeBackend([ProviderError("boom")])

        with pytest.raises(ProviderError):
            transcribe_whole(audio, backend, splitter=splitter, sleep=sleep)
        assert splitter.discarded[-1] == tmp_path / "chunks" / "long_pcm.wav"
