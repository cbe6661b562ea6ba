from __future__ import annotations

import pytest

from src.visitor_checkin.visitor_checkin.core.enums import LookupKind
from src.visitor_checkin.visitor_checkin.core.exceptions import NotFoundError, ValidationError


def test_create_trims_and_rejects_duplicates(container):
    svc = container.catalog_service

    item_id = svc.create(LookupKind.DEPARTMENT, tenant_id=1, name="  Sales  ")

    assert [i.name for i in svc.list_items(LookupKind.DEPARTMENT, 1)] == ["Sales"]
    assert item_id > 0
    with pytest.raises(ValidationError, match="already exists"):
        svc.create(LookupKind.DEPARTMENT, tenant_id=1, name="Sales")


def test_same_name_allowed_for_other_tenant(container):
    svc = container.catalog_service
    svc.create(LookupKind.DESIGNATION, tenant_id=1, name="Intern")
    svc.create(LookupKind.DESIGNATION, tenant_id=2, name="Intern")

    assert len(svc.list_items(LookupKind.DESIGNATION, 2)) == 1


@pytest.mark.parametrize("name", [None, "", "   ", "x" * 101])
def test_name_validation(container, name):
    with pytest.raises(ValidationError):
        container.catalog_service.create(LookupKind.STATUS, tenant_id=1, name=name)


def test_department_changes_are_announced(container):
    svc = container.catalog_service
    item_id = svc.create(LookupKind.DEPARTMENT, tenant_id=1, name="Sales")
    svc.rename(LookupKind.DEPARTMENT, tenant_id=1, item_id=item_id, name="Marketing")
    svc.delete(LookupKind.DEPARTMENT, tenant_id=1, item_id=item_id)

    messages = [n.message for n in container.notification_service.get_page(1, limit=10).items]
    assert messages == [
        f"Department ID {item_id} deleted",
        f'Department ID {item_id} updated to "Marketing"',
        'New department "Sales" added',
    ]


def test_application_types_are_not_announced(container):
    container.catalog_service.create(LookupKind.APPLICATION_TYPE, tenant_id=1, name="interview")

    assert container.notification_service.unread_count(1) == 0


def test_rename_and_delete_require_ownership(container):
    svc = container.catalog_service
    item_id = svc.create(LookupKind.DEPARTMENT, tenant_id=1, name="Sales")

    with pytest.raises(NotFoundError):
        svc.rename(LookupKind.DEPARTMENT, tenant_id=2, item_id=item_id, name="Other")
    with pytest.raises(NotFoundError):
        svc.delete(LookupKind.DEPARTMENT, tenant_id=2, item_id=item_id)


def test_status_in_use_cannot_be_deleted(container, repos):
    status_id = container.catalog_service.create(LookupKind.STATUS, tenant_id=1, name="shortlisted")
    repos.submissions.create(
        qr_code_id=None,
        tenant_id=1,
        name="Visitor",
        email="v@example.com",
        reason=None,
        application_type="interview",
        resume_key=None,
        status="shortlisted",
    )

    with pytest.raises(ValidationError, match="used in form submissions"):
        container.catalog_service.delete(LookupKind.STATUS, tenant_id=1, item_id=status_id)


def test_list_all_bundle(container):
    svc = container.catalog_service
    svc.create(LookupKind.APPLICATION_TYPE, tenant_id=1, name="interview")
    svc.create(LookupKind.STATUS, tenant_id=1, name="pending")

    bundle = svc.list_all(1)

    assert set(bundle) == {"applicationTypes", "designations", "departments", "statuses"}
    assert bundle["applicationTypes"][0]["name"] == "interview"
    assert bundle["departments"] == []
