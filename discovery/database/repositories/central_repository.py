import psycopg

from discovery.correlation.base import BaseCorrelator
from discovery.database.connection import get_connection
from discovery.search.exceptions import CorrelationUnavailableError
from discovery.search.models import CorrelationResult, KnownStatus


class CentralRepository(BaseCorrelator):
    """Cross-case lookups against the cr_file_instances and cr_known_files tables."""

    def lookup(self, md5: str) -> CorrelationResult | None:
        """Count the distinct cases that contain md5 and fetch its known status.

        Returns None when the hash was never recorded.

        Raises:
            CorrelationUnavailableError: on any database error.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        SELECT COUNT(DISTINCT i.case_id),
                               (SELECT k.known_status FROM cr_known_files k
                                WHERE k.md5 = %s LIMIT 1)
                        FROM cr_file_instances i
                        WHERE i.md5 = %s
                        """,
                        (md5, md5),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise CorrelationUnavailableError(f"Central repository lookup failed: {exc}") from exc
        except RuntimeError as exc:
            raise CorrelationUnavailableError(str(exc)) from exc

        if row is None:
            return None
        count, known = row
        if not count and known is None:
            return None
        return CorrelationResult(
            frequency_count=int(count or 0),
            known_status=KnownStatus.parse(known),
        )