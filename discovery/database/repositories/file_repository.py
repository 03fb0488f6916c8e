from collections.abc import Iterator
from typing import Any

import psycopg
from psycopg.rows import dict_row

from discovery.corpus.base import BaseCorpus
from discovery.database.connection import get_connection
from discovery.search.exceptions import CorpusUnavailableError
from discovery.search.models import FileType, KnownStatus, ResultFile


class FileRepository(BaseCorpus):
    """Read-only access to the discovery_files table."""

    CURSOR_NAME = "discovery_files_scan"

    def __init__(self, fetch_size: int = 2000) -> None:
        self._fetch_size = fetch_size

    def iter_files(self, user_name: str) -> Iterator[ResultFile]:
        """Stream every file visible to user_name through a server-side cursor.

        Raises:
            CorpusUnavailableError: on any database error.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(name=self.CURSOR_NAME, row_factory=dict_row) as cur:
                    cur.itersize = self._fetch_size
                    cur.execute(
                        """
                        SELECT f.object_id, f.name, f.parent_path, f.size, f.mime_type,
                               f.md5, f.data_source_id, ds.name AS data_source_name,
                               f.modified_time, f.created_time, f.known_status,
                               f.hash_set_names, f.interesting_item_sets, f.tag_names,
                               f.owner
                        FROM discovery_files f
                        LEFT JOIN discovery_data_sources ds ON ds.id = f.data_source_id
                        WHERE f.owner IS NULL OR f.owner = %s
                        ORDER BY f.object_id
                        """,
                        (user_name,),
                    )
                    for row in cur:
                        yield self._to_result_file(row)
        except psycopg.Error as exc:
            raise CorpusUnavailableError(f"Cannot read file corpus: {exc}") from exc
        except RuntimeError as exc:
            raise CorpusUnavailableError(str(exc)) from exc

    def find_by_id(self, object_id: int) -> ResultFile | None:
        """Find one file by object ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT f.object_id, f.name, f.parent_path, f.size, f.mime_type,
                           f.md5, f.data_source_id, ds.name AS data_source_name,
                           f.modified_time, f.created_time, f.known_status,
                           f.hash_set_names, f.interesting_item_sets, f.tag_names,
                           f.owner
                    FROM discovery_files f
                    LEFT JOIN discovery_data_sources ds ON ds.id = f.data_source_id
                    WHERE f.object_id = %s
                    """,
                    (object_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_result_file(row)

    @staticmethod
    def _to_result_file(row: dict[str, Any]) -> ResultFile:
        return ResultFile(
            object_id=row["object_id"],
            name=row["name"],
            parent_path=row["parent_path"] or "/",
            size=row["size"],
            mime_type=row["mime_type"],
            file_type=FileType.from_mime_type(row["mime_type"]),
            md5=row["md5"],
            data_source_id=row["data_source_id"],
            data_source_name=row["data_source_name"],
            modified_time=row["modified_time"],
            created_time=row["created_time"],
            known_status=KnownStatus.parse(row["known_status"]),
            hash_set_names=tuple(row["hash_set_names"] or ()),
            interesting_item_sets=tuple(row["interesting_item_sets"] or ()),
            tag_names=tuple(row["tag_names"] or ()),
            owner=row["owner"],
        )