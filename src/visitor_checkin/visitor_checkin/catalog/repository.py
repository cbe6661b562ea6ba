from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import LookupKind
from .model import LookupItem


class LookupRepository(Protocol):
    def list_for_tenant(self, kind: LookupKind, tenant_id: int) -> Sequence[LookupItem]:
        raise NotImplementedError

    def get_by_id(self, kind: LookupKind, *, tenant_id: int, item_id: int) -> Optional[LookupItem]:
        raise NotImplementedError

    def get_by_name(self, kind: LookupKind, *, tenant_id: int, name: str) -> Optional[LookupItem]:
        raise NotImplementedError

    def create(self, kind: LookupKind, *, tenant_id: int, name: str) -> int:
        raise NotImplementedError

    def rename(self, kind: LookupKind, *, tenant_id: int, item_id: int, name: str) -> bool:
        raise NotImplementedError

    def delete(self, kind: LookupKind, *, tenant_id: int, item_id: int) -> bool:
        raise NotImplementedError
