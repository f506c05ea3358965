import psycopg

from file_migrator.database.connection import get_connection
from file_migrator.database.models import AuditRecord
from file_migrator.errors import AuditWriteError


class AuditRepository:
    """Append-only writes to the provider_images table."""

    def insert(self, record: AuditRecord) -> None:
        """Insert one audit row.

        Raises:
            AuditWriteError: if the insert fails.
        """
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO provider_images
                        (submission_id, field_id, original_url, stored_path)
                    VALUES (%s, %s, %s, %s)
                    """,
                    (
                        record.submission_id,
                        record.field_id,
                        record.original_url,
                        record.stored_path,
                    ),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise AuditWriteError(f"Audit insert failed: {exc}") from exc

    def exists(self, stored_path: str) -> bool:
        """Return True if an audit row already records this storage key."""
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT 1 FROM provider_images WHERE stored_path = %s LIMIT 1",
                        (stored_path,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise AuditWriteError(f"Audit lookup failed: {exc}") from exc
        return row is not None
