"""
Error Classifier
Reduces the many shapes a ledger failure can take to a ClassifiedError.
"""

import re
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

from web3.exceptions import TimeExhausted

from medchain.core.exceptions import LedgerError
from medchain.models.enums import ErrorCategory
from medchain.models.transaction import ClassifiedError

logger = logging.getLogger(__name__)

REVERT_PATTERN = re.compile(r"revert(?:ed)?:?\s+['\"]?([^'\"\n]+?)['\"]?\s*(?:$|[\n'\"])")

# Order matters: first match wins
KEYWORD_RULES = [
    (('manufacturer not registered',), ErrorCategory.NOT_REGISTERED, 'Manufacturer not registered'),
    (('batch not found',), ErrorCategory.NOT_FOUND, 'Batch not found'),
    (('already verified',), ErrorCategory.ALREADY_VERIFIED, 'Already verified'),
    (('already registered',), ErrorCategory.ALREADY_REGISTERED, 'Already registered'),
    (('insufficient funds',), ErrorCategory.INSUFFICIENT_FUNDS, 'Insufficient funds for gas'),
    (('nonce too low',), ErrorCategory.NONCE_ERROR, 'Transaction nonce error'),
    (('replacement transaction',), ErrorCategory.REPLACEMENT_CONFLICT, 'Transaction replacement issue'),
    (('already known',), ErrorCategory.ALREADY_SUBMITTED, 'Transaction already submitted'),
    (('underpriced',), ErrorCategory.UNDERPRICED, 'Gas price too low'),
    (('network',), ErrorCategory.NETWORK_ERROR, 'Network connection error'),
    (('timeout', 'timed out'), ErrorCategory.TIMEOUT, 'Transaction timeout'),
]

# Funding failures outrank any domain phrase quoted in the same message
PRIORITY_CATEGORIES = [
    ('insufficient funds', ErrorCategory.INSUFFICIENT_FUNDS),
]


def _match_keyword(text: Optional[str]):
    if not text:
        return None
    lowered = text.lower()
    for keywords, category, canonical in KEYWORD_RULES:
        if any(keyword in lowered for keyword in keywords):
            return category, canonical
    return None


def _priority_category(text: Optional[str]) -> Optional[ErrorCategory]:
    if not text:
        return None
    lowered = text.lower()
    for keyword, category in PRIORITY_CATEGORIES:
        if keyword in lowered:
            return category
    return None


def _text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _nested_message(data) -> Optional[str]:
    if isinstance(data, Mapping):
        return _text(data.get('message'))
    return None


def _error_fields(error: Any) -> Dict[str, Optional[str]]:
    """Collect reason / short message / data message / raw message from any error shape"""
    if isinstance(error, str):
        return {'reason': None, 'short_message': None, 'data_message': None, 'raw': error}

    if isinstance(error, Mapping):
        return {
            'reason': _text(error.get('reason')),
            'short_message': _text(error.get('shortMessage') or error.get('short_message')),
            'data_message': _nested_message(error.get('data')),
            'raw': _text(error.get('message')) or str(dict(error))
        }

    fields = {
        'reason': _text(getattr(error, 'reason', None)),
        'short_message': _text(getattr(error, 'short_message', None) or getattr(error, 'shortMessage', None)),
        'data_message': _nested_message(getattr(error, 'data', None)),
        'raw': _text(getattr(error, 'message', None)) or str(error)
    }

    # web3 wraps JSON-RPC errors as Exception({'code': ..., 'message': ..., 'data': ...})
    args = getattr(error, 'args', ())
    if args and isinstance(args[0], Mapping):
        rpc_error = args[0]
        fields['data_message'] = fields['data_message'] or _nested_message(rpc_error.get('data'))
        fields['raw'] = _text(rpc_error.get('message')) or fields['raw']

    return fields


def _classify(error: Any) -> ClassifiedError:
    if error is None:
        return ClassifiedError(ErrorCategory.UNCLASSIFIED, 'Unknown error')

    if isinstance(error, LedgerError):
        return ClassifiedError(error.category, error.message)

    if isinstance(error, TimeExhausted):
        return ClassifiedError(ErrorCategory.TIMEOUT, 'Transaction timeout')

    fields = _error_fields(error)
    raw = fields['raw'] or ''

    message = fields['reason'] or fields['short_message'] or fields['data_message']
    if message is None:
        revert = REVERT_PATTERN.search(raw)
        if revert:
            message = revert.group(1).strip()

    raw_match = _match_keyword(raw)
    if message is None:
        message = raw_match[1] if raw_match else (raw or 'Unknown blockchain error')

    category = _priority_category(raw) or _priority_category(message)
    if category is None:
        match = raw_match or _match_keyword(message)
        category = match[0] if match else ErrorCategory.UNCLASSIFIED
    return ClassifiedError(category, message)


def classify_error(error: Any) -> ClassifiedError:
    """Map any failure to exactly one (category, message) pair. Never raises."""
    try:
        return _classify(error)
    except Exception as e:
        logger.error(f"Error classification failed: {e}")
        return ClassifiedError(ErrorCategory.UNCLASSIFIED, 'Unknown blockchain error')


def to_ledger_error(error: Any, context: Optional[str] = None) -> LedgerError:
    """Wrap a failure as a LedgerError, prefixing the message with what was being attempted"""
    if isinstance(error, LedgerError):
        return error
    classified = classify_error(error)
    message = f"{context}: {classified.message}" if context else classified.message
    return LedgerError(classified.category, message)
