import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from file_migrator.database.connection import get_connection
from file_migrator.database.models import SubmissionRow
from file_migrator.errors import EnumerationError


class SubmissionRepository:
    """Read access to the provider_submissions_api table."""

    SOURCE_COLUMNS = ("file_refs", "raw_payload")

    def list_pending(self, column: str) -> list[SubmissionRow]:
        """List submissions whose source column is not null, ordered by submission id.

        Raises:
            ValueError: if column is not a known source column.
            EnumerationError: if the query fails.
        """
        if column not in self.SOURCE_COLUMNS:
            raise ValueError(
                f"Unknown source column '{column}'. Choose from: {list(self.SOURCE_COLUMNS)}"
            )
        query = sql.SQL(
            """
            SELECT submission_id, {column} AS payload
            FROM provider_submissions_api
            WHERE {column} IS NOT NULL
            ORDER BY submission_id
            """
        ).format(column=sql.Identifier(column))
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query)
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise EnumerationError(f"Failed to list pending submissions: {exc}") from exc

        return [
            SubmissionRow(submission_id=str(row["submission_id"]), payload=row["payload"])
            for row in rows
        ]
