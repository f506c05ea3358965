from typing import Any

import psycopg
from psycopg.types.json import Jsonb

from file_migrator.database.connection import get_connection
from file_migrator.database.models import ProfileImageEntry
from file_migrator.errors import ProfileUpdateError


class ProfileRepository:
    """Read-modify-write of the provider_profiles.images aggregate."""

    def append_image(self, submission_id: str, entry: ProfileImageEntry) -> list[dict[str, Any]]:
        """Append an entry to the submission's images array and return the new array.

        The row is locked with FOR UPDATE for the duration of the transaction.
        A missing profile row is created.

        Raises:
            ProfileUpdateError: if the read or write fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        SELECT images
                        FROM provider_profiles
                        WHERE submission_id = %s
                        FOR UPDATE
                        """,
                        (submission_id,),
                    )
                    row = cur.fetchone()
                    if row is None:
                        images = [entry.to_json()]
                        cur.execute(
                            """
                            INSERT INTO provider_profiles (submission_id, images)
                            VALUES (%s, %s)
                            """,
                            (submission_id, Jsonb(images)),
                        )
                    else:
                        current = row[0] if isinstance(row[0], list) else []
                        images = [*current, entry.to_json()]
                        cur.execute(
                            """
                            UPDATE provider_profiles
                            SET images = %s
                            WHERE submission_id = %s
                            """,
                            (Jsonb(images), submission_id),
                        )
                conn.commit()
        except psycopg.Error as exc:
            raise ProfileUpdateError(
                f"Profile update failed for submission {submission_id}: {exc}"
            ) from exc
        return images
