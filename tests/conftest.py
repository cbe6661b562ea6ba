from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Optional

import pytest

from src.visitor_checkin.visitor_checkin.catalog.model import LookupItem
from src.visitor_checkin.visitor_checkin.container import assemble_container
from src.visitor_checkin.visitor_checkin.core.enums import LookupKind, NotificationStatus, Role
from src.visitor_checkin.visitor_checkin.core.settings import AppSettings, DatabaseSettings
from src.visitor_checkin.visitor_checkin.geofence.model import Coordinate, RegisteredLocation
from src.visitor_checkin.visitor_checkin.main import create_app
from src.visitor_checkin.visitor_checkin.notifications.model import Notification
from src.visitor_checkin.visitor_checkin.qrcodes.model import QRCode
from src.visitor_checkin.visitor_checkin.submissions.model import FormSubmission
from src.visitor_checkin.visitor_checkin.submissions.storage import LocalResumeStorage
from src.visitor_checkin.visitor_checkin.users.model import User

BASE_TIME = datetime(2025, 1, 1, 9, 0, 0)


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self.users.values():
            if u.email == email.lower():
                return u
        return None

    def create_user(self, *, name, email, password_hash, role, created_by=None) -> int:
        self._id += 1
        self.users[self._id] = User(
            user_id=self._id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_by=created_by,
            created_at=BASE_TIME,
        )
        return self._id

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], name=name, email=email)
        return True

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], password_hash=password_hash)
        return True

    def list_members(self, admin_id: int):
        return [u for u in self.users.values() if u.role == Role.MEMBER and u.created_by == admin_id]

    def update_member(self, admin_id: int, member_id: int, *, name: str, email: str) -> bool:
        u = self.users.get(member_id)
        if not u or u.role != Role.MEMBER or u.created_by != admin_id:
            return False
        self.users[member_id] = replace(u, name=name, email=email)
        return True

    def delete_member(self, admin_id: int, member_id: int) -> bool:
        u = self.users.get(member_id)
        if not u or u.role != Role.MEMBER or u.created_by != admin_id:
            return False
        del self.users[member_id]
        return True


class InMemoryLocations:
    def __init__(self):
        self.locations: dict[int, RegisteredLocation] = {}
        self._id = 0
        self.lookups = 0

    def add(self, tenant_id: int, lat: float, lon: float, radius_m: float, place_name: str = "Office") -> RegisteredLocation:
        self._id += 1
        loc = RegisteredLocation(
            location_id=self._id,
            tenant_id=tenant_id,
            place_name=place_name,
            center=Coordinate(latitude=lat, longitude=lon),
            radius_m=radius_m,
            created_at=BASE_TIME,
        )
        self.locations[self._id] = loc
        return loc

    def get_for_tenant(self, tenant_id: int) -> Optional[RegisteredLocation]:
        self.lookups += 1
        for loc in self.locations.values():
            if loc.tenant_id == tenant_id:
                return loc
        return None

    def list_for_tenant(self, tenant_id: int):
        return [loc for loc in self.locations.values() if loc.tenant_id == tenant_id]

    def create(self, *, tenant_id, place_name, center, radius_m) -> int:
        return self.add(tenant_id, center.latitude, center.longitude, radius_m, place_name).location_id

    def update(self, *, location_id, tenant_id, place_name, center, radius_m) -> bool:
        loc = self.locations.get(location_id)
        if not loc or loc.tenant_id != tenant_id:
            return False
        self.locations[location_id] = replace(loc, place_name=place_name, center=center, radius_m=radius_m)
        return True

    def delete(self, *, location_id, tenant_id) -> bool:
        loc = self.locations.get(location_id)
        if not loc or loc.tenant_id != tenant_id:
            return False
        del self.locations[location_id]
        return True


class InMemoryQRCodes:
    def __init__(self):
        self.codes: dict[int, QRCode] = {}
        self._id = 0

    def get_by_code(self, code: str) -> Optional[QRCode]:
        for qr in self.codes.values():
            if qr.code == code:
                return qr
        return None

    def get_for_tenant(self, tenant_id: int) -> Optional[QRCode]:
        for qr in self.codes.values():
            if qr.tenant_id == tenant_id:
                return qr
        return None

    def list_for_tenant(self, tenant_id: int):
        items = [qr for qr in self.codes.values() if qr.tenant_id == tenant_id]
        return sorted(items, key=lambda qr: qr.qr_id, reverse=True)

    def create(self, *, tenant_id: int, code: str, url: str) -> int:
        self._id += 1
        self.codes[self._id] = QRCode(qr_id=self._id, code=code, tenant_id=tenant_id, url=url, created_at=BASE_TIME)
        return self._id

    def delete(self, *, qr_id: int, tenant_id: int) -> bool:
        qr = self.codes.get(qr_id)
        if not qr or qr.tenant_id != tenant_id:
            return False
        del self.codes[qr_id]
        return True


class InMemoryLookups:
    def __init__(self):
        self.items: dict[int, LookupItem] = {}
        self._id = 0

    def list_for_tenant(self, kind: LookupKind, tenant_id: int):
        return [i for i in self.items.values() if i.kind == kind and i.tenant_id == tenant_id]

    def get_by_id(self, kind, *, tenant_id, item_id):
        item = self.items.get(item_id)
        if item and item.kind == kind and item.tenant_id == tenant_id:
            return item
        return None

    def get_by_name(self, kind, *, tenant_id, name):
        for i in self.list_for_tenant(kind, tenant_id):
            if i.name == name:
                return i
        return None

    def create(self, kind, *, tenant_id, name) -> int:
        self._id += 1
        self.items[self._id] = LookupItem(item_id=self._id, tenant_id=tenant_id, kind=kind, name=name)
        return self._id

    def rename(self, kind, *, tenant_id, item_id, name) -> bool:
        item = self.get_by_id(kind, tenant_id=tenant_id, item_id=item_id)
        if not item:
            return False
        self.items[item_id] = replace(item, name=name)
        return True

    def delete(self, kind, *, tenant_id, item_id) -> bool:
        if not self.get_by_id(kind, tenant_id=tenant_id, item_id=item_id):
            return False
        del self.items[item_id]
        return True


class InMemorySubmissions:
    def __init__(self):
        self.items: dict[int, FormSubmission] = {}
        self._id = 0

    def create(self, *, qr_code_id, tenant_id, name, email, reason, application_type, resume_key, status) -> int:
        self._id += 1
        self.items[self._id] = FormSubmission(
            submission_id=self._id,
            qr_code_id=qr_code_id,
            tenant_id=tenant_id,
            name=name,
            email=email,
            reason=reason,
            application_type=application_type,
            resume_key=resume_key,
            status=status,
            created_at=BASE_TIME + timedelta(minutes=self._id),
        )
        return self._id

    def get(self, *, tenant_id, submission_id):
        s = self.items.get(submission_id)
        return s if s and s.tenant_id == tenant_id else None

    def list_for_tenant(self, tenant_id, filters=None):
        items = [s for s in self.items.values() if s.tenant_id == tenant_id]
        if filters:
            if filters.status:
                items = [s for s in items if s.status == filters.status]
            if filters.application_type:
                items = [s for s in items if s.application_type == filters.application_type]
            if filters.reviewed is not None:
                items = [s for s in items if s.reviewed == filters.reviewed]
            if filters.search:
                items = [s for s in items if filters.search in s.name or filters.search in s.email]
        return sorted(items, key=lambda s: s.submission_id, reverse=True)

    def recent_for_tenant(self, tenant_id, *, limit):
        return self.list_for_tenant(tenant_id)[:limit]

    def count_for_tenant(self, tenant_id) -> int:
        return len(self.list_for_tenant(tenant_id))

    def count_with_status(self, tenant_id, status_name) -> int:
        return len([s for s in self.list_for_tenant(tenant_id) if s.status == status_name])

    def update_status(self, *, submission_id, status) -> bool:
        self.items[submission_id] = replace(self.items[submission_id], status=status)
        return True

    def set_reviewed(self, *, submission_id, reviewed) -> bool:
        self.items[submission_id] = replace(self.items[submission_id], reviewed=reviewed)
        return True

    def assign(self, *, submission_id, designation, department_name) -> bool:
        self.items[submission_id] = replace(
            self.items[submission_id], designation=designation, department_name=department_name
        )
        return True


class InMemoryNotifications:
    def __init__(self):
        self.items: dict[int, Notification] = {}
        self._id = 0

    def create(self, *, tenant_id, type, message) -> int:
        self._id += 1
        self.items[self._id] = Notification(
            notification_id=self._id,
            tenant_id=tenant_id,
            type=type,
            message=message,
            status=NotificationStatus.UNREAD,
            created_at=BASE_TIME + timedelta(minutes=self._id),
        )
        return self._id

    def _for(self, tenant_id):
        items = [n for n in self.items.values() if n.tenant_id == tenant_id]
        return sorted(items, key=lambda n: n.notification_id, reverse=True)

    def count_unread(self, tenant_id) -> int:
        return len([n for n in self._for(tenant_id) if n.status == NotificationStatus.UNREAD])

    def count_all(self, tenant_id) -> int:
        return len(self._for(tenant_id))

    def list_page(self, tenant_id, *, limit, offset):
        return self._for(tenant_id)[offset:offset + limit]

    def get(self, *, tenant_id, notification_id):
        n = self.items.get(notification_id)
        return n if n and n.tenant_id == tenant_id else None

    def set_status(self, *, tenant_id, notification_id, status) -> bool:
        n = self.get(tenant_id=tenant_id, notification_id=notification_id)
        if not n:
            return False
        self.items[notification_id] = replace(n, status=status)
        return True

    def mark_all_read(self, tenant_id) -> int:
        unread = [n for n in self._for(tenant_id) if n.status == NotificationStatus.UNREAD]
        for n in unread:
            self.items[n.notification_id] = replace(n, status=NotificationStatus.READ)
        return len(unread)


@pytest.fixture
def repos(tmp_path):
    return SimpleNamespace(
        users=InMemoryUsers(),
        locations=InMemoryLocations(),
        qrcodes=InMemoryQRCodes(),
        lookups=InMemoryLookups(),
        submissions=InMemorySubmissions(),
        notifications=InMemoryNotifications(),
        storage=LocalResumeStorage(tmp_path / "uploads"),
    )


@pytest.fixture
def container(repos):
    return assemble_container(
        users_repo=repos.users,
        locations_repo=repos.locations,
        qrcodes_repo=repos.qrcodes,
        lookups_repo=repos.lookups,
        submissions_repo=repos.submissions,
        notifications_repo=repos.notifications,
        resume_storage=repos.storage,
        public_form_url="http://testserver/form",
        max_resume_bytes=5 * 1024 * 1024,
    )


@pytest.fixture
def settings(tmp_path):
    return AppSettings(
        secret_key="test-secret",
        db=DatabaseSettings(host="localhost", port=3306, user="root", password="", database="visitor_checkin_test"),
        upload_dir=str(tmp_path / "uploads"),
        public_form_url="http://testserver/form",
        testing=True,
    )


@pytest.fixture
def app(settings, container):
    return create_app(settings=settings, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(container):
    """A signed-up tenant admin (seeded with the default status)."""
    return container.auth_service.signup(name="Admin", email="admin@example.com", password="secret123")


@pytest.fixture
def admin_client(client, admin):
    res = client.post("/api/login", json={"email": "admin@example.com", "password": "secret123"})
    assert res.status_code == 200
    return client
