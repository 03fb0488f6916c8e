from datetime import datetime, timezone

import pytest

from discovery.search.models import CorrelationResult, FileType, KnownStatus, ResultFile
from discovery.search.sorting import FileSortingMethod, sort_files


def _ids(files: list[ResultFile]) -> list[int]:
    return [f.object_id for f in files]


def _files() -> list[ResultFile]:
    records = [
        ResultFile(object_id=1, name="b.txt", size=30, file_type=FileType.DOCUMENT,
                   modified_time=datetime(2024, 3, 1, tzinfo=timezone.utc),
                   data_source_id=2, data_source_name="phone"),
        ResultFile(object_id=2, name="A.jpg", size=10, file_type=FileType.IMAGE,
                   modified_time=None, data_source_id=1, data_source_name="laptop"),
        ResultFile(object_id=3, name="c.mp4", size=None, file_type=FileType.VIDEO,
                   modified_time=datetime(2023, 1, 1, tzinfo=timezone.utc),
                   data_source_id=1, data_source_name="laptop"),
        ResultFile(object_id=4, name="a.txt", size=20, file_type=FileType.DOCUMENT,
                   modified_time=datetime(2024, 1, 1, tzinfo=timezone.utc)),
    ]
    records[0].attach_correlation(CorrelationResult(frequency_count=50))
    records[1].attach_correlation(CorrelationResult(frequency_count=1))
    records[3].attach_correlation(None)
    return records


class TestSortFiles:
    def test_by_file_name(self) -> None:
        assert _ids(sort_files(_files(), FileSortingMethod.BY_FILE_NAME)) == [2, 4, 1, 3]

    def test_by_file_size_ascending_missing_last(self) -> None:
        assert _ids(sort_files(_files(), FileSortingMethod.BY_FILE_SIZE)) == [2, 4, 1, 3]

    def test_by_modified_time_oldest_first_missing_last(self) -> None:
        assert _ids(sort_files(_files(), FileSortingMethod.BY_MODIFIED_TIME)) == [3, 4, 1, 2]

    def test_by_frequency_rarest_first_absent_last(self) -> None:
        assert _ids(sort_files(_files(), FileSortingMethod.BY_FREQUENCY)) == [2, 1, 4, 3]

    def test_known_files_sort_after_counted(self) -> None:
        known = ResultFile(object_id=9, name="k")
        known.attach_correlation(CorrelationResult(frequency_count=0, known_status=KnownStatus.KNOWN))
        common = ResultFile(object_id=8, name="c")
        common.attach_correlation(CorrelationResult(frequency_count=500))
        assert _ids(sort_files([known, common], FileSortingMethod.BY_FREQUENCY)) == [8, 9]

    def test_by_file_type_then_name(self) -> None:
        assert _ids(sort_files(_files(), FileSortingMethod.BY_FILE_TYPE)) == [2, 3, 4, 1]

    def test_by_data_source_missing_last(self) -> None:
        assert _ids(sort_files(_files(), FileSortingMethod.BY_DATA_SOURCE)) == [2, 3, 1, 4]

    def test_by_full_path(self) -> None:
        assert _ids(sort_files(_files(), FileSortingMethod.BY_FULL_PATH)) == [2, 4, 1, 3]

    @pytest.mark.parametrize("method", list(FileSortingMethod))
    def test_sorting_is_idempotent(self, method: FileSortingMethod) -> None:
        once = sort_files(_files(), method)
        assert _ids(sort_files(once, method)) == _ids(once)

    @pytest.mark.parametrize("method", list(FileSortingMethod))
    def test_ties_resolved_by_path_and_id(self, method: FileSortingMethod) -> None:
        twins = [ResultFile(object_id=i, name="same", size=5) for i in (3, 1, 2)]
        assert _ids(sort_files(twins, method)) == [1, 2, 3]

    def test_sizes_ascending_scenario(self) -> None:
        files = [ResultFile(object_id=i, name=f"f{i}", size=s) for i, s in enumerate([50, 10, 40, 20, 30])]
        assert [f.size for f in sort_files(files, FileSortingMethod.BY_FILE_SIZE)] == [10, 20, 30, 40, 50]

    def test_unknown_method_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown file sorting method"):
            sort_files([], "shuffle")  # type: ignore[arg-type]
