"""
Unit tests for FileGrouperImpl.
Verifies grouping by size and digest, the min_count threshold and read-error recovery.
"""
import pytest
from unittest import mock
from samanlainen.core import grouper as grouper_module
from samanlainen.core.errors import ReadError
from samanlainen.core.grouper import FileGrouperImpl
from samanlainen.core.hasher import HasherImpl
from samanlainen.core.models import FileCandidate


def candidates_for(paths):
    return [FileCandidate(path=str(p), size=p.stat().st_size) for p in paths]


class TestGroupBySize:
    def test_groups_equal_sizes_only(self):
        files = [FileCandidate(path=f"/f{i}", size=size) for i, size in enumerate([10, 20, 10, 30, 20, 10])]
        groups = FileGrouperImpl().group_by_size(files)

        assert set(groups) == {10, 20}
        assert [f.path for f in groups[10]] == ["/f0", "/f2", "/f5"]

    def test_min_count_eliminates_small_groups(self):
        files = [FileCandidate(path=f"/f{i}", size=size) for i, size in enumerate([10, 20, 10, 20, 10])]
        groups = FileGrouperImpl(min_count=3).group_by_size(files)

        assert list(groups) == [10]

    def test_min_count_below_two_is_rejected(self):
        with pytest.raises(ValueError):
            FileGrouperImpl(min_count=1)


class TestSplitByHash:
    def test_splits_same_size_files_by_content(self, test_files):
        files = candidates_for([test_files["same_size_1"], test_files["same_size_2"]])
        grouper = FileGrouperImpl(HasherImpl(scan_size=4096))

        assert grouper.split_by_full_hash([files]) == [{}]

    def test_identical_files_share_a_group(self, test_files):
        files = candidates_for([test_files["dup1_a"], test_files["dup1_b"], test_files["dup1_c"]])
        [groups] = FileGrouperImpl().split_by_full_hash([files])

        assert len(groups) == 1
        assert [f.path for f in next(iter(groups.values()))] == [str(test_files[k]) for k in ("dup1_a", "dup1_b", "dup1_c")]

    def test_batches_are_split_independently(self, temp_dir, make_file):
        """Equal digests in different batches never end up in one group."""
        paths = [make_file(temp_dir / f"f{i}.bin", b"same") for i in range(4)]
        batches = [candidates_for(paths[:2]), candidates_for(paths[2:])]

        result = FileGrouperImpl().split_by_tail_hash(batches)

        assert len(result) == 2
        assert [[f.path for f in fs] for fs in result[0].values()] == [[str(paths[0]), str(paths[1])]]
        assert [[f.path for f in fs] for fs in result[1].values()] == [[str(paths[2]), str(paths[3])]]

    def test_empty_batches(self):
        assert FileGrouperImpl(max_workers=4).split_by_head_hash([]) == []
        assert FileGrouperImpl().split_by_head_hash([[]]) == [{}]

    def test_read_error_drops_only_the_failing_file(self, test_files):
        files = candidates_for([test_files["dup1_a"], test_files["dup1_b"], test_files["dup1_c"]])
        test_files["dup1_b"].unlink()
        errors = []

        [groups] = FileGrouperImpl().split_by_tail_hash([files], on_error=errors.append)

        assert len(groups) == 1
        survivors = next(iter(groups.values()))
        assert [f.path for f in survivors] == [str(test_files["dup1_a"]), str(test_files["dup1_c"])]
        assert len(errors) == 1
        assert isinstance(errors[0], ReadError)
        assert errors[0].path == str(test_files["dup1_b"])

    def test_read_error_can_eliminate_the_group(self, test_files):
        files = candidates_for([test_files["dup2_a"], test_files["dup2_b"]])
        test_files["dup2_a"].unlink()

        assert FileGrouperImpl().split_by_head_hash([files]) == [{}]

    def test_parallel_hashing_matches_sequential(self, test_files):
        batches = [["dup1_a", "dup1_b", "dup1_c"], ["dup2_a", "dup2_b"], ["same_size_1", "same_size_2"]]

        def run(workers):
            result = FileGrouperImpl(max_workers=workers).split_by_full_hash(
                [candidates_for([test_files[k] for k in batch]) for batch in batches]
            )
            return [{d: [f.path for f in fs] for d, fs in groups.items()} for groups in result]

        sequential = run(1)
        assert run(4) == sequential
        assert [len(groups) for groups in sequential] == [1, 1, 0]

    def test_one_pool_for_all_batches(self, temp_dir, make_file):
        created = []
        real_executor = grouper_module.ThreadPoolExecutor

        def counting_executor(*args, **kwargs):
            created.append(kwargs.get("max_workers"))
            return real_executor(*args, **kwargs)

        batches = []
        for i in range(10):
            pair = [make_file(temp_dir / f"{i}_{n}.bin", b"x" * (10 + i)) for n in "ab"]
            batches.append(candidates_for(pair))

        with mock.patch.object(grouper_module, "ThreadPoolExecutor", side_effect=counting_executor):
            result = FileGrouperImpl(max_workers=8).split_by_full_hash(batches)

        assert created == [8]
        assert all(len(groups) == 1 for groups in result)

    def test_size_grouping_does_not_start_a_pool(self):
        files = [FileCandidate(path=f"/f{i}", size=10) for i in range(5)]
        with mock.patch.object(grouper_module, "ThreadPoolExecutor") as executor:
            FileGrouperImpl(max_workers=8).group_by_size(files)
        executor.assert_not_called()
