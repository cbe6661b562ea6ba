from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from ..catalog.service import CatalogService
from ..common.validators import optional_text, require_email, require_max_length
from ..core.constants import (
    ALLOWED_RESUME_EXTENSIONS,
    DEFAULT_STATUS_NAME,
    MAX_LOOKUP_NAME_LENGTH,
    MAX_RESUME_BYTES,
    RECENT_SUBMISSIONS_LIMIT,
    RESUME_CONTENT_TYPES,
)
from ..core.enums import LookupKind, NotificationType
from ..core.exceptions import (
    GeofenceDenied,
    InvalidCoordinate,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ..geofence.model import Coordinate, NotConfigured
from ..geofence.policy import GeofencePolicy, LocationLookup
from ..notifications.service import NotificationService
from ..qrcodes.repository import QRCodeRepository
from .model import FormSubmission, ResumeUpload, SubmissionFilter, SubmissionForm
from .repository import SubmissionRepository
from .storage import ResumeStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResumeFile:
    path: Path
    content_type: str
    download_name: str
    inline: bool


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def parse_reviewed_filter(value: Optional[str]) -> Optional[bool]:
    if value is None or value == "":
        return None
    if value in ("0", "1"):
        return value == "1"
    raise ValidationError("reviewed must be 0 or 1")


class SubmissionService:
    """Use cases: public form submission and the admin review workflow."""

    def __init__(
        self,
        submissions: SubmissionRepository,
        qrcodes: QRCodeRepository,
        catalog: CatalogService,
        notifications: NotificationService,
        policy: GeofencePolicy,
        locations: LocationLookup,
        storage: ResumeStorage,
        *,
        max_resume_bytes: int = MAX_RESUME_BYTES,
    ):
        self._submissions = submissions
        self._qrcodes = qrcodes
        self._catalog = catalog
        self._notifications = notifications
        self._policy = policy
        self._locations = locations
        self._storage = storage
        self._max_resume_bytes = max_resume_bytes

    def _check_position(self, tenant_id: int, form: SubmissionForm) -> None:
        has_position = optional_text(form.latitude) is not None or optional_text(form.longitude) is not None
        if not has_position:
            if self._locations.get_for_tenant(tenant_id) is not None:
                raise InvalidCoordinate("latitude and longitude are required for this form")
            return

        candidate = Coordinate.parse(form.latitude, form.longitude, allow_strings=True)
        outcome = self._policy.evaluate(tenant_id, candidate)
        # No registered location: visitors are not geofenced.
        if isinstance(outcome, NotConfigured):
            return
        if not outcome.within_range:
            logger.info("Submission rejected tenant=%s distance=%.1fm", tenant_id, outcome.distance_m)
            raise GeofenceDenied("User not within range")

    def _check_resume(self, resume: ResumeUpload) -> None:
        ext = _extension(resume.filename)
        if ext not in ALLOWED_RESUME_EXTENSIONS:
            raise ValidationError("Only PDF, DOC and DOCX files are allowed")
        if resume.content_type not in RESUME_CONTENT_TYPES.values():
            raise ValidationError("Only PDF, DOC and DOCX files are allowed")
        if len(resume.data) > self._max_resume_bytes:
            raise ValidationError("Resume must not exceed 5 MB")

    def submit(self, code: str, form: SubmissionForm, resume: Optional[ResumeUpload] = None) -> FormSubmission:
        name = optional_text(form.name)
        application_type = optional_text(form.application_type)
        if not name or not optional_text(form.email) or not application_type:
            raise ValidationError("Name, email, and application type are required")
        email = require_email(form.email)

        qr = self._qrcodes.get_by_code(code)
        if not qr:
            raise NotFoundError("QR code not found")
        tenant_id = qr.tenant_id

        app_type = self._catalog.require_existing(LookupKind.APPLICATION_TYPE, tenant_id=tenant_id, name=application_type)
        self._check_position(tenant_id, form)

        resume_key = None
        if resume is not None and resume.filename:
            self._check_resume(resume)
            resume_key = self._storage.save(
                filename=resume.filename, content_type=resume.content_type, data=resume.data
            )

        try:
            default_status = self._catalog.require_existing(LookupKind.STATUS, tenant_id=tenant_id, name=DEFAULT_STATUS_NAME)
        except ValidationError:
            logger.error("Tenant %s has no default status %r", tenant_id, DEFAULT_STATUS_NAME)
            raise StorageError("Default status not configured") from None

        reason = optional_text(form.reason)
        submission_id = self._submissions.create(
            qr_code_id=qr.qr_id,
            tenant_id=tenant_id,
            name=name,
            email=email,
            reason=reason,
            application_type=app_type.name,
            resume_key=resume_key,
            status=default_status.name,
        )
        self._notifications.notify(
            tenant_id,
            NotificationType.FORM_SUBMISSION,
            f'New {app_type.name} submission from "{name}".',
        )
        logger.info("Form submitted id=%s tenant=%s code=%s", submission_id, tenant_id, code)

        created = self._submissions.get(tenant_id=tenant_id, submission_id=submission_id)
        if created:
            return created
        return FormSubmission(
            submission_id=submission_id,
            qr_code_id=qr.qr_id,
            tenant_id=tenant_id,
            name=name,
            email=email,
            reason=reason,
            application_type=app_type.name,
            resume_key=resume_key,
            status=default_status.name,
        )

    def list_submissions(self, tenant_id: int, filters: Optional[SubmissionFilter] = None) -> Sequence[FormSubmission]:
        return self._submissions.list_for_tenant(tenant_id, filters)

    def _get_owned(self, tenant_id: int, submission_id: int) -> FormSubmission:
        submission = self._submissions.get(tenant_id=tenant_id, submission_id=submission_id)
        if not submission:
            raise NotFoundError("Submission not found or not authorized")
        return submission

    def get_resume(self, tenant_id: int, submission_id: int) -> ResumeFile:
        submission = self._get_owned(tenant_id, submission_id)
        if not submission.resume_key:
            raise NotFoundError("No resume uploaded for this submission")
        if not self._storage.exists(submission.resume_key):
            raise NotFoundError("Resume file not found in storage")

        ext = _extension(submission.resume_key)
        return ResumeFile(
            path=self._storage.path_for(submission.resume_key),
            content_type=RESUME_CONTENT_TYPES.get(ext, "application/octet-stream"),
            download_name=submission.resume_key,
            inline=ext == "pdf",
        )

    def update_status(self, tenant_id: int, submission_id: int, status: Any) -> str:
        status = optional_text(status) if isinstance(status, str) else None
        if not status:
            raise ValidationError("Status is required")
        self._get_owned(tenant_id, submission_id)

        try:
            item = self._catalog.require_existing(LookupKind.STATUS, tenant_id=tenant_id, name=status)
        except ValidationError:
            raise ValidationError("Invalid status provided") from None

        self._submissions.update_status(submission_id=submission_id, status=item.name)
        self._notifications.notify(
            tenant_id,
            NotificationType.STATUS_UPDATE,
            f'Submission ID {submission_id} status updated to "{item.name}"',
        )
        return item.name

    def set_reviewed(self, tenant_id: int, submission_id: int, reviewed: Any) -> bool:
        if isinstance(reviewed, bool) or reviewed not in (0, 1) or not isinstance(reviewed, int):
            raise ValidationError("Invalid review status provided")
        self._get_owned(tenant_id, submission_id)
        self._submissions.set_reviewed(submission_id=submission_id, reviewed=reviewed == 1)
        return reviewed == 1

    def assign(
        self,
        tenant_id: int,
        submission_id: int,
        *,
        designation: Any = None,
        department_name: Any = None,
    ) -> None:
        designation = optional_text(designation)
        department_name = optional_text(department_name)
        if designation:
            require_max_length(designation, "Designation", MAX_LOOKUP_NAME_LENGTH)
        if department_name:
            require_max_length(department_name, "Department name", MAX_LOOKUP_NAME_LENGTH)

        self._get_owned(tenant_id, submission_id)

        if designation:
            designation = self._catalog.require_existing(
                LookupKind.DESIGNATION, tenant_id=tenant_id, name=designation
            ).name
        if department_name:
            try:
                department_name = self._catalog.require_existing(
                    LookupKind.DEPARTMENT, tenant_id=tenant_id, name=department_name
                ).name
            except ValidationError:
                raise ValidationError("Invalid department name") from None

        self._submissions.assign(
            submission_id=submission_id, designation=designation, department_name=department_name
        )
        self._notifications.notify(
            tenant_id,
            NotificationType.SUBMISSION_UPDATE,
            f'Submission ID {submission_id} updated with designation "{designation or "None"}" '
            f'and department "{department_name or "None"}".',
        )

    def count(self, tenant_id: int) -> int:
        return self._submissions.count_for_tenant(tenant_id)

    def recent(self, tenant_id: int) -> Sequence[FormSubmission]:
        return self._submissions.recent_for_tenant(tenant_id, limit=RECENT_SUBMISSIONS_LIMIT)
