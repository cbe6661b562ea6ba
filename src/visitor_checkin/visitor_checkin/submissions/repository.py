from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FormSubmission, SubmissionFilter


class SubmissionRepository(Protocol):
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
        raise NotImplementedError

    def get(self, *, tenant_id: int, submission_id: int) -> Optional[FormSubmission]:
        raise NotImplementedError

    def list_for_tenant(self, tenant_id: int, filters: Optional[SubmissionFilter] = None) -> Sequence[FormSubmission]:
        raise NotImplementedError

    def recent_for_tenant(self, tenant_id: int, *, limit: int) -> Sequence[FormSubmission]:
        raise NotImplementedError

    def count_for_tenant(self, tenant_id: int) -> int:
        raise NotImplementedError

    def count_with_status(self, tenant_id: int, status_name: str) -> int:
        raise NotImplementedError

    def update_status(self, *, submission_id: int, status: str) -> bool:
        raise NotImplementedError

    def set_reviewed(self, *, submission_id: int, reviewed: bool) -> bool:
        raise NotImplementedError

    def assign(self, *, submission_id: int, designation: Optional[str], department_name: Optional[str]) -> bool:
        raise NotImplementedError
