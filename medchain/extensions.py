# extensions.py
import logging
from flask import current_app

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'medchain_ledger'


class LedgerExtension:
    """Binds a LedgerService to a Flask app (no app bound until init_app)"""

    def __init__(self, app=None, service=None):
        self.service = service
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        service = self.service
        if service is None:
            from medchain import create_ledger_service
            service = create_ledger_service(app.config.get('MEDCHAIN_CONFIG'))

        app.extensions[EXTENSION_KEY] = service
        logger.info("Ledger service registered on Flask app")
        return service


def get_ledger_service():
    """Get the ledger service for use in routes"""
    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:
        raise RuntimeError("Ledger service not initialised - call LedgerExtension.init_app(app)")


ledger = LedgerExtension()
