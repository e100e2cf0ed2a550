"""
Record Adapter
Turns raw contract call results into canonical records.

Depending on the web3 binding and the deployed contract version a read can
come back as a positional tuple or as a named structure (AttributeDict or a
decoded struct mapping). Every field is read index-first and falls back to the
contract field name, so both shapes yield the same record.
"""

import logging
from collections.abc import Mapping
from typing import Any, Sequence

from medchain.core.exceptions import LedgerError
from medchain.models.enums import ErrorCategory
from medchain.models.manufacturer import ManufacturerRecord, derive_manufacturer_status
from medchain.models.batch import BatchRecord, ExpiredReport
from medchain.models.stats import ContractStats

logger = logging.getLogger(__name__)

ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'

_MISSING = object()


def read_field(raw: Any, index: int, name: str) -> Any:
    """Read one field by position, then by name; _MISSING when neither exists"""
    if isinstance(raw, (list, tuple)) and index < len(raw):
        return raw[index]
    if isinstance(raw, Mapping) and name in raw:
        return raw[name]
    return _MISSING


def _require(raw, index, name, kind):
    value = read_field(raw, index, name)
    if value is _MISSING:
        raise LedgerError(ErrorCategory.UNCLASSIFIED, f"Malformed {kind} record: missing '{name}'")
    return value


def _require_identity(raw, index, name, kind, empty_value):
    value = read_field(raw, index, name)
    if value is _MISSING or value is None or str(value) in ('', empty_value):
        raise LedgerError(ErrorCategory.NOT_FOUND, f"{kind.capitalize()} not found")
    return str(value)


def _as_int(value) -> int:
    return int(value or 0)


def adapt_manufacturer(raw: Any) -> ManufacturerRecord:
    """getManufacturer -> (wallet, name, license, email, isVerified, isActive, registeredAt)"""
    address = _require_identity(raw, 0, 'wallet', 'manufacturer', ZERO_ADDRESS)
    is_verified = bool(_require(raw, 4, 'isVerified', 'manufacturer'))
    is_active = bool(_require(raw, 5, 'isActive', 'manufacturer'))

    return ManufacturerRecord(
        address=address,
        name=str(_require(raw, 1, 'name', 'manufacturer')),
        license=str(_require(raw, 2, 'license', 'manufacturer')),
        email=str(_require(raw, 3, 'email', 'manufacturer')),
        is_verified=is_verified,
        is_active=is_active,
        registered_at=_as_int(_require(raw, 6, 'registeredAt', 'manufacturer')),
        status=derive_manufacturer_status(is_active, is_verified)
    )


def adapt_batch(raw: Any) -> BatchRecord:
    """verifyBatch / getBatchesByManufacturer item -> BatchRecord"""
    batch_id = _require_identity(raw, 0, 'batchId', 'batch', '')
    expired_scan_count = _as_int(_require(raw, 8, 'expiredScanCount', 'batch'))

    return BatchRecord(
        batch_id=batch_id,
        medicine_name=str(_require(raw, 1, 'medicineName', 'batch')),
        manufacturer_address=str(_require(raw, 2, 'manufacturer', 'batch')),
        manufacturing_date=_as_int(_require(raw, 3, 'manufacturingDate', 'batch')),
        expiry_date=_as_int(_require(raw, 4, 'expiryDate', 'batch')),
        is_active=bool(_require(raw, 5, 'isActive', 'batch')),
        is_recalled=bool(_require(raw, 6, 'isRecalled', 'batch')),
        created_at=_as_int(_require(raw, 7, 'createdAt', 'batch')),
        expired_scan_count=max(0, expired_scan_count)
    )


def adapt_expired_report(raw: Any) -> ExpiredReport:
    return ExpiredReport(
        batch_id=_require_identity(raw, 0, 'batchId', 'batch', ''),
        medicine_name=str(_require(raw, 1, 'medicineName', 'expired report')),
        manufacturer_address=str(_require(raw, 2, 'manufacturer', 'expired report')),
        expired_scan_count=_as_int(_require(raw, 3, 'expiredScanCount', 'expired report')),
        last_scanned_at=_as_int(_require(raw, 4, 'lastScannedAt', 'expired report'))
    )


def adapt_contract_stats(raw: Any, network=None) -> ContractStats:
    """getContractStats -> (_totalBatches, _totalManufacturers, _totalRecalledBatches, _totalExpiredScans, _admin)"""
    return ContractStats(
        total_batches=_as_int(_require(raw, 0, '_totalBatches', 'stats')),
        total_manufacturers=_as_int(_require(raw, 1, '_totalManufacturers', 'stats')),
        total_recalled_batches=_as_int(_require(raw, 2, '_totalRecalledBatches', 'stats')),
        total_expired_scans=_as_int(_require(raw, 3, '_totalExpiredScans', 'stats')),
        admin_address=str(_require(raw, 4, '_admin', 'stats')),
        network_name=network.name if network else None,
        chain_id=network.chain_id if network else None
    )


def adapt_many(items: Sequence[Any], adapter) -> list:
    return [adapter(item) for item in items or []]
