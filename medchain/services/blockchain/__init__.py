from .ledger_service import LedgerService
from .error_classifier import classify_error
from .enumeration_resolver import ManufacturerEnumerationResolver, TierResult
from .transaction_service import TransactionService, buffered_gas_limit

__all__ = [
    'LedgerService', 'classify_error',
    'ManufacturerEnumerationResolver', 'TierResult',
    'TransactionService', 'buffered_gas_limit'
]
