from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from onboarding.database.connection import get_connection
from onboarding.domain.models import Session
from onboarding.session.repository import BaseSessionRepository
from onboarding.session.serializer import session_from_dict, session_to_dict

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS onboarding_sessions (
    id TEXT PRIMARY KEY,
    payload JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


class PostgresSessionRepository(BaseSessionRepository):
    """Sessions stored as one JSONB payload per row in onboarding_sessions."""

    def ensure_schema(self) -> None:
        with get_connection() as conn:
            conn.execute(CREATE_TABLE_SQL)
            conn.commit()

    def get(self, session_id: str) -> Session | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    "SELECT payload FROM onboarding_sessions WHERE id = %s",
                    (session_id,),
                )
                row: dict[str, Any] | None = cur.fetchone()
        if row is None:
            return None
        return session_from_dict(row["payload"])

    def put(self, session: Session) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO onboarding_sessions (id, payload, updated_at)
                VALUES (%s, %s, NOW())
                ON CONFLICT (id) DO UPDATE
                SET payload = EXCLUDED.payload, updated_at = NOW()
                """,
                (session.session_id, Jsonb(session_to_dict(session))),
            )
            conn.commit()

    def delete(self, session_id: str) -> None:
        with get_connection() as conn:
            conn.execute("DELETE FROM onboarding_sessions WHERE id = %s", (session_id,))
            conn.commit()
