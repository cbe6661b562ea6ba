from __future__ import annotations

import io
import logging
import re
import secrets
from typing import Any, BinaryIO, Optional, Sequence

import qrcode
from PIL import Image

from ..core.enums import NotConfiguredPolicy
from ..core.exceptions import ConflictError, NotFoundError, TenantNotFound, ValidationError
from ..geofence.model import Coordinate
from ..geofence.policy import GeofencePolicy, GeofenceVerdict, LocationLookup, to_verdict
from .model import QRCode
from .repository import QRCodeRepository

logger = logging.getLogger(__name__)

_CODE_RE = re.compile(r"^[A-Za-z0-9_-]{4,100}$")


def render_qr_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_qr_image(stream: BinaryIO) -> str:
    """Return the text of the first QR code found in an uploaded image."""

    # pyzbar binds libzbar when imported; only the decode endpoint needs it.
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except (OSError, ValueError) as e:
        raise ValidationError("Uploaded file is not a readable image") from e

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No QR code detected in the image")
    return decoded[0].data.decode("utf-8").strip()


class QRCodeService:
    """Use cases: the tenant's QR code and the public QR-scoped checks."""

    def __init__(
        self,
        qrcodes: QRCodeRepository,
        locations: LocationLookup,
        policy: GeofencePolicy,
        *,
        public_form_url: str,
    ):
        self._qrcodes = qrcodes
        self._locations = locations
        self._policy = policy
        self._public_form_url = public_form_url.rstrip("/")

    def create(self, tenant_id: int, *, code: Optional[str] = None, url: Optional[str] = None) -> QRCode:
        for value in (code, url):
            if value is not None and not isinstance(value, str):
                raise ValidationError("Code and url must be strings")
        code = (code or "").strip() or secrets.token_urlsafe(12)
        if not _CODE_RE.match(code):
            raise ValidationError("Code must be 4-100 letters, digits, '-' or '_'")

        if self._qrcodes.get_by_code(code):
            raise ConflictError("Code already exists")

        existing = self._qrcodes.get_for_tenant(tenant_id)
        if existing:
            raise ConflictError("User already has a QR code. Delete the existing one to create a new one.")

        url = (url or "").strip() or f"{self._public_form_url}/{code}"
        qr_id = self._qrcodes.create(tenant_id=tenant_id, code=code, url=url)
        logger.info("QR code saved id=%s code=%s tenant=%s", qr_id, code, tenant_id)
        return QRCode(qr_id=qr_id, code=code, tenant_id=tenant_id, url=url)

    def list_for_tenant(self, tenant_id: int) -> Sequence[QRCode]:
        return self._qrcodes.list_for_tenant(tenant_id)

    def get_code_for_tenant(self, tenant_id: int) -> str:
        qr = self._qrcodes.get_for_tenant(tenant_id)
        if not qr:
            raise NotFoundError("No QR code found for user")
        return qr.code

    def get_by_code(self, code: str) -> QRCode:
        qr = self._qrcodes.get_by_code(code)
        if not qr:
            raise TenantNotFound("QR code not found")
        return qr

    def delete(self, tenant_id: int, qr_id: int) -> None:
        if not self._qrcodes.delete(qr_id=qr_id, tenant_id=tenant_id):
            raise NotFoundError("QR code not found or unauthorized")

    def location_requirement(self, code: str) -> dict:
        """Tell the visitor form whether it must collect a position first."""
        qr = self.get_by_code(code)
        location = self._locations.get_for_tenant(qr.tenant_id)
        return {
            "required": location is not None,
            "place_name": location.place_name if location else None,
        }

    def validate_position(self, code: str, latitude: Any, longitude: Any) -> GeofenceVerdict:
        """QR-scoped check used by the public visitor form.

        A tenant that never registered a location does not want visitors
        geofenced, so NotConfigured admits.
        """

        candidate = Coordinate.parse(latitude, longitude)
        qr = self.get_by_code(code)
        outcome = self._policy.evaluate(qr.tenant_id, candidate)
        return to_verdict(
            outcome,
            when_not_configured=NotConfiguredPolicy.ADMIT,
            admitted_message="Valid QR code and within range",
        )

    def render_png(self, code: str) -> bytes:
        qr = self.get_by_code(code)
        return render_qr_png(qr.url)
