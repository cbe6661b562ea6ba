from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    MEMBER = "member"


class NotificationStatus(str, Enum):
    READ = "read"
    UNREAD = "unread"


class NotificationType(str, Enum):
    FORM_SUBMISSION = "Form Submission"
    STATUS_UPDATE = "Status Update"
    SUBMISSION_UPDATE = "Submission Update"
    STATUS = "Status"
    DEPARTMENT = "Department"
    DESIGNATION = "Designation"


class LookupKind(str, Enum):
    """Per-tenant lookup lists managed from the admin dashboard."""

    APPLICATION_TYPE = "application_type"
    DEPARTMENT = "department"
    DESIGNATION = "designation"
    STATUS = "status"


class NotConfiguredPolicy(str, Enum):
    """How a call site interprets a tenant without a registered location."""

    ADMIT = "admit"
    DENY = "deny"
