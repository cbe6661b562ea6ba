from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class FormSubmission:
    """A visitor's form entry, owned by the tenant whose QR code was scanned."""

    submission_id: int
    qr_code_id: Optional[int]
    tenant_id: int
    name: str
    email: str
    reason: Optional[str]
    application_type: str
    resume_key: Optional[str]
    status: str
    reviewed: bool = False
    designation: Optional[str] = None
    department_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.submission_id,
            "qr_code_id": self.qr_code_id,
            "user_id": self.tenant_id,
            "name": self.name,
            "email": self.email,
            "reason": self.reason,
            "application_type": self.application_type,
            "application_type_name": self.application_type,
            "resume": self.resume_key,
            "status": self.status,
            "reviewed": 1 if self.reviewed else 0,
            "designation": self.designation,
            "department_name": self.department_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class SubmissionFilter:
    """Dashboard filters; None means "any"."""

    status: Optional[str] = None
    application_type: Optional[str] = None
    reviewed: Optional[bool] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class ResumeUpload:
    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class SubmissionForm:
    name: Optional[str]
    email: Optional[str]
    application_type: Optional[str]
    reason: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
