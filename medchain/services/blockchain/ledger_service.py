"""
Ledger Service
Facade over the MedChain contract consumed by routing code.

Reads return canonical records or raise LedgerError; writes are either
prepared as unsigned TransactionDescriptors or, when DEV_ALLOW_SERVER_WRITES is
on, submitted with the service key.
"""

import logging
from typing import List, Optional

from web3 import Web3

from medchain.core.exceptions import LedgerError
from medchain.models.enums import ErrorCategory, LedgerMethod
from medchain.models.batch import BatchRecord, ExpiredReport
from medchain.models.manufacturer import ManufacturerRecord
from medchain.models.stats import ContractStats, WalletBalance
from medchain.models.transaction import TransactionDescriptor, WriteReceipt
from medchain.services.blockchain import record_adapter
from medchain.services.blockchain.error_classifier import to_ledger_error
from medchain.services.blockchain.enumeration_resolver import ManufacturerEnumerationResolver
from medchain.services.blockchain.transaction_service import TransactionService

logger = logging.getLogger(__name__)


class LedgerService:
    """Immutable entry point to the MedChain contract; safe to share across threads"""

    def __init__(self, clients, config):
        self.clients = clients
        self.config = config
        self.transactions = TransactionService(clients, config)
        self.resolver = ManufacturerEnumerationResolver(
            clients,
            hydrate=self.read_manufacturer,
            read_stats=self.read_contract_stats,
            event_scan_window=config.EVENT_SCAN_BLOCK_WINDOW,
            max_workers=config.HYDRATION_WORKERS
        )

    @property
    def writes_enabled(self) -> bool:
        return self.transactions.writes_enabled

    def ensure_ready(self):
        if self.clients is None or self.clients.contract is None:
            raise LedgerError(ErrorCategory.NETWORK_ERROR, 'MedChain contract not available. Check ABI/address.')

    def _call(self, method: str, *args):
        """Invoke a view function, classifying any failure"""
        self.ensure_ready()
        try:
            return getattr(self.clients.contract.functions, method)(*args).call()
        except Exception as e:
            logger.error(f"Contract call {method} failed: {e}")
            raise to_ledger_error(e)

    # Reads

    def read_manufacturer(self, address: str) -> ManufacturerRecord:
        logger.debug(f"Fetching manufacturer: {address}")
        manufacturer = record_adapter.adapt_manufacturer(self._call('getManufacturer', address))
        logger.debug(f"Manufacturer data: {manufacturer.name} ({manufacturer.status.value})")
        return manufacturer

    def read_batch(self, batch_id: str) -> BatchRecord:
        logger.info(f"Verifying batch: {batch_id}")
        batch = record_adapter.adapt_batch(self._call('verifyBatch', batch_id))
        logger.info(f"Batch verified: {batch.medicine_name} (Expired scans: {batch.expired_scan_count})")
        return batch

    def read_contract_stats(self) -> ContractStats:
        stats = record_adapter.adapt_contract_stats(self._call('getContractStats'), self.clients.network)
        logger.info(f"Stats: {stats.total_batches} batches, {stats.total_manufacturers} manufacturers, "
                    f"{stats.total_expired_scans} expired scans")
        return stats

    def is_batch_valid(self, batch_id: str) -> bool:
        return bool(self._call('isBatchValid', batch_id))

    def is_batch_expired(self, batch_id: str) -> bool:
        return bool(self._call('isBatchExpired', batch_id))

    def read_manufacturer_batches(self, address: str) -> List[BatchRecord]:
        batches = record_adapter.adapt_many(self._call('getBatchesByManufacturer', address),
                                            record_adapter.adapt_batch)
        logger.info(f"Found {len(batches)} batches for manufacturer {address}")
        return batches

    def read_expired_reports(self) -> List[ExpiredReport]:
        reports = record_adapter.adapt_many(self._call('getExpiredMedicineReports'),
                                            record_adapter.adapt_expired_report)
        return sorted(reports, key=lambda r: r.expired_scan_count, reverse=True)

    def enumerate_manufacturers(self) -> List[ManufacturerRecord]:
        self.ensure_ready()
        return self.resolver.resolve()

    def get_wallet_balance(self, address: Optional[str] = None) -> WalletBalance:
        """Native-currency balance of an address, defaulting to the service signer"""
        if address is None:
            if self.clients.account is None:
                raise LedgerError(ErrorCategory.UNCLASSIFIED, 'No address given and no service signer configured')
            address = self.clients.account.address

        try:
            balance_wei = self.clients.web3.eth.get_balance(address)
        except Exception as e:
            logger.error(f"Failed to get wallet balance: {e}")
            raise to_ledger_error(e, 'Failed to get balance')

        return WalletBalance(
            address=address,
            balance_wei=int(balance_wei),
            balance=f"{Web3.from_wei(balance_wei, 'ether'):.6f}",
            currency=self.clients.network.currency
        )

    def get_network_info(self):
        """Chain/contract summary for status pages"""
        try:
            latest_block = self.clients.web3.eth.block_number
        except Exception as e:
            logger.error(f"Error getting network info: {e}")
            raise to_ledger_error(e)

        return {
            'network': self.clients.network.to_dict(),
            'latest_block': latest_block,
            'contract_address': self.clients.contract_address,
            'writes_enabled': self.writes_enabled
        }

    # Prepared (wallet-signed) writes

    def _prepare(self, method: LedgerMethod, *args) -> TransactionDescriptor:
        self.ensure_ready()
        return self.transactions.prepare(method.value, args)

    def prepare_register_manufacturer(self, address, name, license, email=''):
        return self._prepare(LedgerMethod.REGISTER_MANUFACTURER, address, name, license, email)

    def prepare_verify_manufacturer(self, address):
        return self._prepare(LedgerMethod.VERIFY_MANUFACTURER, address)

    def prepare_deactivate_manufacturer(self, address):
        return self._prepare(LedgerMethod.DEACTIVATE_MANUFACTURER, address)

    def prepare_register_batch(self, batch_id, medicine_name, manufacturing_date, expiry_date):
        return self._prepare(LedgerMethod.REGISTER_MEDICINE_BATCH, batch_id, medicine_name,
                             int(manufacturing_date), int(expiry_date))

    def prepare_mark_batch_recalled(self, batch_id):
        return self._prepare(LedgerMethod.MARK_BATCH_RECALLED, batch_id)

    def prepare_record_expired_scan(self, batch_id):
        return self._prepare(LedgerMethod.RECORD_EXPIRED_SCAN, batch_id)

    # Server-signed writes (dev only)

    def _execute(self, method: LedgerMethod, *args) -> WriteReceipt:
        # Flag check precedes every client access
        self.transactions.ensure_writes_enabled()
        self.ensure_ready()
        return self.transactions.execute(method.value, args)

    def dev_register_manufacturer(self, address, name, license, email=''):
        return self._execute(LedgerMethod.REGISTER_MANUFACTURER, address, name, license, email)

    def dev_verify_manufacturer(self, address):
        return self._execute(LedgerMethod.VERIFY_MANUFACTURER, address)

    def dev_deactivate_manufacturer(self, address):
        return self._execute(LedgerMethod.DEACTIVATE_MANUFACTURER, address)

    def dev_register_batch(self, batch_id, medicine_name, manufacturing_date, expiry_date):
        # Gate before coercing dates
        self.transactions.ensure_writes_enabled()
        return self._execute(LedgerMethod.REGISTER_MEDICINE_BATCH, batch_id, medicine_name,
                             int(manufacturing_date), int(expiry_date))

    def dev_mark_batch_recalled(self, batch_id):
        return self._execute(LedgerMethod.MARK_BATCH_RECALLED, batch_id)

    def dev_record_expired_scan(self, batch_id):
        return self._execute(LedgerMethod.RECORD_EXPIRED_SCAN, batch_id)
