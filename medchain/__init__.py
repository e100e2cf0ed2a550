# medchain/__init__.py
import logging

from medchain.config.settings import get_config
from medchain.config.blockchain import BlockchainConfig
from medchain.services.blockchain.ledger_service import LedgerService
from medchain.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_ledger_service(config=None, web3=None):
    """Build the ledger service once at process start and hand it to callers"""
    config = config or get_config()
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)

    clients = BlockchainConfig(config).connect(web3=web3)
    service = LedgerService(clients, config)

    if service.writes_enabled:
        logger.warning("Server-signed writes ENABLED (DEV_ALLOW_SERVER_WRITES=true)")
    return service


__all__ = ['create_ledger_service', 'LedgerService']
