from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import QRCode


class QRCodeRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[QRCode]:
        raise NotImplementedError

    def get_for_tenant(self, tenant_id: int) -> Optional[QRCode]:
        raise NotImplementedError

    def list_for_tenant(self, tenant_id: int) -> Sequence[QRCode]:
        raise NotImplementedError

    def create(self, *, tenant_id: int, code: str, url: str) -> int:
        raise NotImplementedError

    def delete(self, *, qr_id: int, tenant_id: int) -> bool:
        raise NotImplementedError
