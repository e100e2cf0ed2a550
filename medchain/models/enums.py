# models/enums.py
from enum import Enum

class ManufacturerStatus(Enum):
    ACTIVE_VERIFIED = "active_verified"
    ACTIVE_UNVERIFIED = "active_unverified"
    INACTIVE_VERIFIED = "inactive_verified"
    INACTIVE_UNVERIFIED = "inactive_unverified"
    # Placeholder returned when the ledger cannot be enumerated
    ENUMERATION_LIMITED = "enumeration_limited"

class ErrorCategory(Enum):
    NOT_REGISTERED = "NotRegistered"
    NOT_FOUND = "NotFound"
    ALREADY_VERIFIED = "AlreadyVerified"
    ALREADY_REGISTERED = "AlreadyRegistered"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    NONCE_ERROR = "NonceError"
    REPLACEMENT_CONFLICT = "ReplacementConflict"
    ALREADY_SUBMITTED = "AlreadySubmitted"
    UNDERPRICED = "Underpriced"
    NETWORK_ERROR = "NetworkError"
    TIMEOUT = "Timeout"
    WRITES_DISABLED = "WritesDisabled"
    UNCLASSIFIED = "Unclassified"

class LedgerMethod(Enum):
    REGISTER_MANUFACTURER = "registerManufacturer"
    VERIFY_MANUFACTURER = "verifyManufacturer"
    DEACTIVATE_MANUFACTURER = "deactivateManufacturer"
    REGISTER_MEDICINE_BATCH = "registerMedicineBatch"
    MARK_BATCH_RECALLED = "markBatchRecalled"
    RECORD_EXPIRED_SCAN = "recordExpiredScan"
