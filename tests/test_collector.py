"""
Unit tests for CandidateCollector.
Covers size filtering, zero-byte exclusion, identity deduplication and root priority.
"""
import os
import sys
import pytest
from samanlainen.core.collector import CandidateCollector
from samanlainen.core.errors import EnumerationError
from samanlainen.core.models import DeduplicationStats


def names(candidates):
    return sorted(os.path.basename(c.path) for c in candidates)


class TestSizeFiltering:
    def test_zero_byte_files_are_never_candidates(self, test_files, temp_dir):
        candidates = CandidateCollector(min_size=0).collect([str(temp_dir)])
        assert "empty.txt" not in names(candidates)
        assert len(candidates) == len(test_files) - 1

    def test_bounds_are_inclusive(self, test_files, temp_dir):
        candidates = CandidateCollector(min_size=1500, max_size=2048).collect([str(temp_dir)])
        assert names(candidates) == ["dup2_a.bin", "dup2_b.bin", "same_size_1.txt", "same_size_2.txt"]

    def test_no_upper_bound(self, test_files, temp_dir):
        candidates = CandidateCollector(min_size=2049).collect([str(temp_dir)])
        assert names(candidates) == ["unique.txt"]

    def test_candidate_metadata(self, test_files, temp_dir):
        candidates = CandidateCollector().collect([str(temp_dir)])
        by_name = {os.path.basename(c.path): c for c in candidates}

        assert by_name["dup1_a.txt"].size == 1000
        assert by_name["dup1_a.txt"].modified_at == pytest.approx(1_000_000)
        assert by_name["dup1_a.txt"].root_priority == 0
        assert by_name["dup1_a.txt"].identity is not None


class TestIdentityAndPriority:
    def test_overlapping_roots_report_each_file_once(self, test_files, temp_dir):
        """A nested root listed again does not produce aliases."""
        candidates = CandidateCollector().collect([str(temp_dir), str(temp_dir / "subdir")])
        paths = [c.path for c in candidates]
        assert len(paths) == len(set(paths)) == len(test_files) - 1

    def test_first_root_wins_priority(self, test_files, temp_dir):
        """Files under the nested root are claimed by whichever root lists them first."""
        candidates = CandidateCollector().collect([str(temp_dir / "subdir"), str(temp_dir)])
        by_name = {os.path.basename(c.path): c for c in candidates}

        assert by_name["dup1_c.txt"].root_priority == 0
        assert by_name["dup1_a.txt"].root_priority == 1

    @pytest.mark.skipif(sys.platform == "win32", reason="Hardlink inode semantics are POSIX specific")
    def test_hardlinks_are_one_candidate(self, temp_dir, make_file):
        original = make_file(temp_dir / "a.bin", b"X" * 100)
        os.link(original, temp_dir / "b.bin")

        candidates = CandidateCollector().collect([str(temp_dir)])

        assert names(candidates) == ["a.bin"]


class TestUnreadableRoots:
    def test_missing_root_is_recorded_and_other_roots_continue(self, test_files, temp_dir):
        stats = DeduplicationStats()
        missing = str(temp_dir / "nowhere")

        candidates = CandidateCollector().collect([missing, str(temp_dir)], stats)

        assert len(candidates) == len(test_files) - 1
        errors = stats.errors_of(EnumerationError)
        assert len(errors) == 1
        assert errors[0].path == missing

    def test_collect_stage_is_reported(self, test_files, temp_dir):
        stats = DeduplicationStats()
        events = []
        stats.add_listener(lambda stage, data: events.append((stage, data.get("status"))))

        CandidateCollector().collect([str(temp_dir)], stats)

        assert events[0] == ("collect", "started")
        assert stats.stage_stats["collect"]["files"] == len(test_files) - 1
