from .date_helpers import date_helper_utils, DateHelpersUtils, UNKNOWN_DATE
from .logging_config import setup_logging

__all__ = ['date_helper_utils', 'DateHelpersUtils', 'UNKNOWN_DATE', 'setup_logging']
