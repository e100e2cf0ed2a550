from .enums import ManufacturerStatus, ErrorCategory, LedgerMethod
from .manufacturer import ManufacturerRecord, derive_manufacturer_status
from .batch import BatchRecord, ExpiredReport
from .stats import ContractStats, WalletBalance
from .transaction import TransactionDescriptor, WriteReceipt, ClassifiedError

__all__ = [
    'ManufacturerStatus', 'ErrorCategory', 'LedgerMethod',
    'ManufacturerRecord', 'derive_manufacturer_status',
    'BatchRecord', 'ExpiredReport',
    'ContractStats', 'WalletBalance',
    'TransactionDescriptor', 'WriteReceipt', 'ClassifiedError'
]
