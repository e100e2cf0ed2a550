# models/batch.py
from dataclasses import dataclass
from typing import Dict, Any

from medchain.utils.date_helpers import date_helper_utils


@dataclass
class BatchRecord:
    """Medicine batch as held by the MedChain contract"""
    batch_id: str
    medicine_name: str
    manufacturer_address: str
    manufacturing_date: int
    expiry_date: int
    is_active: bool
    is_recalled: bool
    created_at: int
    expired_scan_count: int = 0

    @property
    def manufacturing_date_formatted(self) -> str:
        return date_helper_utils.format_epoch_date(self.manufacturing_date)

    @property
    def expiry_date_formatted(self) -> str:
        return date_helper_utils.format_epoch_date(self.expiry_date)

    @property
    def created_at_formatted(self) -> str:
        return date_helper_utils.format_epoch(self.created_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "batch_id": self.batch_id,
            "medicine_name": self.medicine_name,
            "manufacturer_address": self.manufacturer_address,
            "manufacturing_date": self.manufacturing_date,
            "expiry_date": self.expiry_date,
            "is_active": self.is_active,
            "is_recalled": self.is_recalled,
            "created_at": self.created_at,
            "expired_scan_count": self.expired_scan_count,
            "manufacturing_date_formatted": self.manufacturing_date_formatted,
            "expiry_date_formatted": self.expiry_date_formatted,
            "created_at_formatted": self.created_at_formatted
        }


@dataclass
class ExpiredReport:
    """Aggregated scans of an expired batch"""
    batch_id: str
    medicine_name: str
    manufacturer_address: str
    expired_scan_count: int
    last_scanned_at: int

    @property
    def last_scanned_at_formatted(self) -> str:
        return date_helper_utils.format_epoch(self.last_scanned_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "batch_id": self.batch_id,
            "medicine_name": self.medicine_name,
            "manufacturer_address": self.manufacturer_address,
            "expired_scan_count": self.expired_scan_count,
            "last_scanned_at": self.last_scanned_at,
            "last_scanned_at_formatted": self.last_scanned_at_formatted
        }
