# services/blockchain/transaction_service.py
import logging
from typing import Any, Sequence

from web3 import Web3
from web3.exceptions import TimeExhausted

from medchain.core.exceptions import LedgerError, WritesDisabledError
from medchain.models.enums import ErrorCategory
from medchain.models.transaction import TransactionDescriptor, WriteReceipt
from medchain.services.blockchain.error_classifier import to_ledger_error

logger = logging.getLogger(__name__)

# Gas limit = ceil(estimate * 13 / 10)
GAS_BUFFER_NUMERATOR = 13
GAS_BUFFER_DENOMINATOR = 10


def buffered_gas_limit(estimate: int) -> int:
    """Apply the 30% safety margin to a gas estimate, rounding up"""
    return -(-int(estimate) * GAS_BUFFER_NUMERATOR // GAS_BUFFER_DENOMINATOR)


class TransactionService:
    """Prepares unsigned writes for wallets and, in dev mode, submits them with the service key"""

    def __init__(self, clients, config):
        self.clients = clients
        self.writes_enabled = bool(getattr(config, 'DEV_ALLOW_SERVER_WRITES', False))
        self.default_gas_limit = int(config.DEFAULT_GAS_LIMIT)
        self.gas_price_gwei = int(config.GAS_PRICE_GWEI)

    def prepare(self, method: str, args: Sequence[Any]) -> TransactionDescriptor:
        """Describe a contract write for an external signer; no ledger interaction"""
        return TransactionDescriptor(
            contract_address=self.clients.contract_address,
            method=method,
            args=tuple(args),
            abi=self.clients.abi
        )

    def estimate_gas_limit(self, function_call, sender: str) -> int:
        """Buffered estimate, or the configured default when estimation fails"""
        try:
            estimate = function_call.estimate_gas({'from': sender})
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default {self.default_gas_limit}")
            return self.default_gas_limit

        gas_limit = buffered_gas_limit(estimate)
        logger.info(f"Estimated gas: {estimate}, using: {gas_limit}")
        return gas_limit

    def ensure_writes_enabled(self):
        if not self.writes_enabled:
            raise WritesDisabledError()

    def execute(self, method: str, args: Sequence[Any]) -> WriteReceipt:
        """Sign and submit a write with the service credential, then wait for the receipt"""
        self.ensure_writes_enabled()

        account = self.clients.account
        if account is None:
            raise LedgerError(ErrorCategory.UNCLASSIFIED, 'Server signer not configured - set PRIVATE_KEY')

        web3 = self.clients.web3
        logger.info(f"Server write {method} with args: {list(args)}")

        try:
            function_call = getattr(self.clients.contract.functions, method)(*args)
        except Exception as e:
            logger.error(f"Cannot encode {method}: {e}")
            raise to_ledger_error(e, f"Cannot encode {method}")

        gas_limit = self.estimate_gas_limit(function_call, account.address)

        try:
            transaction = function_call.build_transaction({
                'from': account.address,
                'gas': gas_limit,
                'gasPrice': Web3.to_wei(self.gas_price_gwei, 'gwei'),
                'nonce': web3.eth.get_transaction_count(account.address, 'pending'),
                'chainId': self.clients.network.chain_id
            })

            signed_txn = account.sign_transaction(transaction)
            tx_hash = web3.eth.send_raw_transaction(signed_txn.raw_transaction)
            tx_hash_hex = Web3.to_hex(tx_hash)
            logger.info(f"Transaction submitted: {tx_hash_hex}")

            # Blocks until mined; only the client's own receipt timeout applies
            receipt = web3.eth.wait_for_transaction_receipt(tx_hash)
        except TimeExhausted as e:
            logger.error(f"Server write {method} not confirmed: {e}")
            raise LedgerError(ErrorCategory.TIMEOUT, 'Transaction timeout')
        except Exception as e:
            logger.error(f"Server write {method} failed: {e}")
            raise to_ledger_error(e)

        if receipt['status'] != 1:
            logger.error(f"Transaction {tx_hash_hex} reverted in block {receipt['blockNumber']}")
            raise LedgerError(ErrorCategory.UNCLASSIFIED, f"Transaction reverted: {tx_hash_hex}")

        logger.info(f"Transaction mined in block {receipt['blockNumber']}")
        return WriteReceipt(
            tx_hash=tx_hash_hex,
            block_number=receipt['blockNumber'],
            gas_used=receipt['gasUsed'],
            explorer_url=self.clients.network.tx_url(tx_hash_hex)
        )
