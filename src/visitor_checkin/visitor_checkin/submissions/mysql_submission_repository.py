from __future__ import annotations

from typing import Any, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import FormSubmission, SubmissionFilter
from .repository import SubmissionRepository

_COLUMNS = """
    id, qr_code_id, user_id, name, email, reason, application_type, resume,
    status, reviewed, designation, department_name, created_at, updated_at
"""


def _row_to_submission(row: dict) -> FormSubmission:
    return FormSubmission(
        submission_id=int(row["id"]),
        qr_code_id=row.get("qr_code_id"),
        tenant_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        reason=row.get("reason"),
        application_type=row["application_type"],
        resume_key=row.get("resume"),
        status=row["status"],
        reviewed=bool(row.get("reviewed")),
        designation=row.get("designation"),
        department_name=row.get("department_name"),
        created_at=as_datetime(row.get("created_at")),
        updated_at=as_datetime(row.get("updated_at")),
    )


class MySQLSubmissionRepository(SubmissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        qr_code_id: Optional[int],
        tenant_id: int,
        name: str,
        email: str,
        reason: Optional[str],
        application_type: str,
        resume_key: Optional[str],
        status: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO form_submissions
                    (qr_code_id, user_id, name, email, reason, application_type, resume,
                     status, reviewed, designation, department_name, created_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, 0, NULL, NULL, NOW())
                """,
                (qr_code_id, tenant_id, name, email, reason, application_type, resume_key, status),
            )
            return int(cur.lastrowid)

    def get(self, *, tenant_id: int, submission_id: int) -> Optional[FormSubmission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM form_submissions WHERE id=%s AND user_id=%s",
                (submission_id, tenant_id),
            )
            row = fetchone(cur)
            return _row_to_submission(row) if row else None

    def list_for_tenant(self, tenant_id: int, filters: Optional[SubmissionFilter] = None) -> Sequence[FormSubmission]:
        clauses: List[str] = ["user_id=%s"]
        params: List[Any] = [tenant_id]

        if filters:
            if filters.status:
                clauses.append("status=%s")
                params.append(filters.status)
            if filters.application_type:
                clauses.append("application_type=%s")
                params.append(filters.application_type)
            if filters.reviewed is not None:
                clauses.append("reviewed=%s")
                params.append(1 if filters.reviewed else 0)
            if filters.search:
                clauses.append("(name LIKE %s OR email LIKE %s)")
                like = f"%{filters.search}%"
                params.extend([like, like])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM form_submissions WHERE {' AND '.join(clauses)} ORDER BY created_at DESC, id DESC",
                tuple(params),
            )
            return [_row_to_submission(r) for r in fetchall(cur)]

    def recent_for_tenant(self, tenant_id: int, *, limit: int) -> Sequence[FormSubmission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM form_submissions WHERE user_id=%s ORDER BY created_at DESC, id DESC LIMIT %s",
                (tenant_id, int(limit)),
            )
            return [_row_to_submission(r) for r in fetchall(cur)]

    def count_for_tenant(self, tenant_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM form_submissions WHERE user_id=%s", (tenant_id,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def count_with_status(self, tenant_id: int, status_name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM form_submissions WHERE user_id=%s AND status=%s",
                (tenant_id, status_name),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def update_status(self, *, submission_id: int, status: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE form_submissions SET status=%s, updated_at=NOW() WHERE id=%s",
                (status, submission_id),
            )
            return cur.rowcount > 0

    def set_reviewed(self, *, submission_id: int, reviewed: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE form_submissions SET reviewed=%s, updated_at=NOW() WHERE id=%s",
                (1 if reviewed else 0, submission_id),
            )
            return cur.rowcount > 0

    def assign(self, *, submission_id: int, designation: Optional[str], department_name: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE form_submissions SET designation=%s, department_name=%s, updated_at=NOW() WHERE id=%s",
                (designation, department_name, submission_id),
            )
            return cur.rowcount > 0
