from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .catalog.mysql_lookup_repository import MySQLLookupRepository
from .catalog.repository import LookupRepository
from .catalog.service import CatalogService
from .core.settings import AppSettings
from .database.connection import DBConfig, DatabaseConnection
from .geofence.policy import GeofencePolicy
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .qrcodes.mysql_qrcode_repository import MySQLQRCodeRepository
from .qrcodes.repository import QRCodeRepository
from .qrcodes.service import QRCodeService
from .submissions.mysql_submission_repository import MySQLSubmissionRepository
from .submissions.repository import SubmissionRepository
from .submissions.service import SubmissionService
from .submissions.storage import LocalResumeStorage, ResumeStorage
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    locations_repo: LocationRepository
    qrcodes_repo: QRCodeRepository
    lookups_repo: LookupRepository
    submissions_repo: SubmissionRepository
    notifications_repo: NotificationRepository
    resume_storage: ResumeStorage

    geofence_policy: GeofencePolicy
    auth_service: AuthService
    user_service: UserService
    location_service: LocationService
    qrcode_service: QRCodeService
    catalog_service: CatalogService
    notification_service: NotificationService
    submission_service: SubmissionService


def assemble_container(
    *,
    users_repo: UserRepository,
    locations_repo: LocationRepository,
    qrcodes_repo: QRCodeRepository,
    lookups_repo: LookupRepository,
    submissions_repo: SubmissionRepository,
    notifications_repo: NotificationRepository,
    resume_storage: ResumeStorage,
    public_form_url: str,
    max_resume_bytes: int,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL in the app, fakes in tests)."""

    geofence_policy = GeofencePolicy(locations_repo)

    notification_service = NotificationService(notifications_repo)
    catalog_service = CatalogService(lookups_repo, notification_service, status_usage=submissions_repo)
    auth_service = AuthService(users_repo, lookups_repo)
    user_service = UserService(users_repo)
    location_service = LocationService(locations_repo, geofence_policy)
    qrcode_service = QRCodeService(
        qrcodes_repo,
        locations_repo,
        geofence_policy,
        public_form_url=public_form_url,
    )
    submission_service = SubmissionService(
        submissions_repo,
        qrcodes_repo,
        catalog_service,
        notification_service,
        geofence_policy,
        locations_repo,
        resume_storage,
        max_resume_bytes=max_resume_bytes,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        locations_repo=locations_repo,
        qrcodes_repo=qrcodes_repo,
        lookups_repo=lookups_repo,
        submissions_repo=submissions_repo,
        notifications_repo=notifications_repo,
        resume_storage=resume_storage,
        geofence_policy=geofence_policy,
        auth_service=auth_service,
        user_service=user_service,
        location_service=location_service,
        qrcode_service=qrcode_service,
        catalog_service=catalog_service,
        notification_service=notification_service,
        submission_service=submission_service,
    )


def build_container(settings: AppSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(settings.db))

    return assemble_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        qrcodes_repo=MySQLQRCodeRepository(conn),
        lookups_repo=MySQLLookupRepository(conn),
        submissions_repo=MySQLSubmissionRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        resume_storage=LocalResumeStorage(settings.upload_dir),
        public_form_url=settings.public_form_url,
        max_resume_bytes=settings.max_resume_bytes,
    )
