# models/manufacturer.py
from dataclasses import dataclass
from typing import Optional, Dict, Any

from medchain.models.enums import ManufacturerStatus
from medchain.utils.date_helpers import date_helper_utils

ENUMERATION_LIMITED_NOTE = 'Complete list unavailable. Deploy updated contract for full enumeration.'


def derive_manufacturer_status(is_active: bool, is_verified: bool) -> ManufacturerStatus:
    if is_active and is_verified:
        return ManufacturerStatus.ACTIVE_VERIFIED
    if is_active:
        return ManufacturerStatus.ACTIVE_UNVERIFIED
    if is_verified:
        return ManufacturerStatus.INACTIVE_VERIFIED
    return ManufacturerStatus.INACTIVE_UNVERIFIED


@dataclass
class ManufacturerRecord:
    """Manufacturer identity as held by the MedChain contract"""
    address: str
    name: str
    license: str
    email: str
    is_verified: bool
    is_active: bool
    registered_at: int
    status: ManufacturerStatus

    total_count: Optional[int] = None
    note: Optional[str] = None

    @property
    def registered_date(self) -> str:
        return date_helper_utils.format_epoch(self.registered_at)

    @property
    def is_placeholder(self) -> bool:
        return self.status == ManufacturerStatus.ENUMERATION_LIMITED

    @classmethod
    def enumeration_limited(cls, total_count: int) -> 'ManufacturerRecord':
        """
        Synthetic record standing in for a list the ledger cannot enumerate.

        total_count and note are only ever set here; records read from the
        ledger leave them None and omit them from to_dict().
        """
        return cls(
            address='enumeration_not_available',
            name=f"{total_count} manufacturers registered",
            license='Use specific address lookup',
            email='',
            is_verified=False,
            is_active=True,
            registered_at=0,
            status=ManufacturerStatus.ENUMERATION_LIMITED,
            total_count=total_count,
            note=ENUMERATION_LIMITED_NOTE
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "address": self.address,
            "name": self.name,
            "license": self.license,
            "email": self.email,
            "is_verified": self.is_verified,
            "is_active": self.is_active,
            "registered_at": self.registered_at,
            "registered_date": self.registered_date,
            "status": self.status.value
        }
        if self.is_placeholder:
            data["total_count"] = self.total_count
            data["note"] = self.note
        return data
