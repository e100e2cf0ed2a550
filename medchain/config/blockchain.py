# config/blockchain.py
import os
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from web3 import Web3
from eth_account import Account

from medchain.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ABI_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'contracts', 'MedChain.json')

NETWORKS = {
    'sepolia': {
        'chain_id': 11155111,
        'name': 'Sepolia Testnet',
        'currency': 'SepoliaETH',
        'explorer_url': 'https://sepolia.etherscan.io',
        'is_testnet': True
    },
    'mainnet': {
        'chain_id': 1,
        'name': 'Ethereum Mainnet',
        'currency': 'ETH',
        'explorer_url': 'https://etherscan.io',
        'is_testnet': False
    },
    'filecoin': {
        'chain_id': 314159,
        'name': 'Filecoin Calibration Testnet',
        'currency': 'tFIL',
        'explorer_url': 'https://calibration.filfox.info',
        'is_testnet': True
    }
}


@dataclass(frozen=True)
class NetworkConfig:
    chain_id: int
    name: str
    currency: str
    explorer_url: str
    is_testnet: bool

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url}/tx/{tx_hash}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'chain_id': self.chain_id,
            'name': self.name,
            'currency': self.currency,
            'explorer_url': self.explorer_url,
            'is_testnet': self.is_testnet
        }


@dataclass(frozen=True)
class LedgerClients:
    """Ledger handles shared by every call; built once at startup"""
    web3: Any
    contract: Any
    contract_address: Optional[str]
    abi: List[Dict[str, Any]]
    network: NetworkConfig
    account: Any = None


def get_network_config(network: str, chain_id: Optional[int] = None) -> NetworkConfig:
    """Resolve a network name to its explorer/currency settings"""
    entry = NETWORKS.get((network or '').lower())
    if entry is None:
        logger.warning(f"Unknown network '{network}', falling back to mainnet settings")
        entry = NETWORKS['mainnet']
    return NetworkConfig(
        chain_id=chain_id if chain_id is not None else entry['chain_id'],
        name=entry['name'],
        currency=entry['currency'],
        explorer_url=entry['explorer_url'],
        is_testnet=entry['is_testnet']
    )


def load_contract_abi(path: Optional[str] = None) -> List[Dict[str, Any]]:
    """Load an ABI stored either as a bare list or as a compiler artifact"""
    abi_path = path or DEFAULT_ABI_PATH
    if not os.path.exists(abi_path):
        raise ConfigurationError(f"Contract ABI not found at {abi_path}")

    with open(abi_path, 'r') as f:
        abi_data = json.load(f)

    if isinstance(abi_data, list):
        return abi_data
    if isinstance(abi_data, dict) and 'abi' in abi_data:
        return abi_data['abi']
    raise ConfigurationError(f"Unknown ABI format in {abi_path}")


class BlockchainConfig:
    """Builds the ledger client handles from a settings object"""

    REQUIRED_SETTINGS = ['BLOCKCHAIN_RPC_URL', 'CONTRACT_ADDRESS']

    def __init__(self, config):
        self.config = config

    def missing_settings(self) -> List[str]:
        required = list(self.REQUIRED_SETTINGS)
        if getattr(self.config, 'DEV_ALLOW_SERVER_WRITES', False):
            required.append('PRIVATE_KEY')
        return [key for key in required if not getattr(self.config, key, None)]

    def connect(self, web3=None) -> LedgerClients:
        """Create the web3 client, contract and (optional) signing account"""
        missing = self.missing_settings()
        if missing:
            raise ConfigurationError(f"Missing required blockchain settings: {', '.join(missing)}")

        config = self.config
        network = get_network_config(config.NETWORK, config.CHAIN_ID)
        abi = load_contract_abi(config.CONTRACT_ABI_PATH)

        if web3 is None:
            web3 = Web3(Web3.HTTPProvider(config.BLOCKCHAIN_RPC_URL))

        contract_address = Web3.to_checksum_address(config.CONTRACT_ADDRESS)
        contract = web3.eth.contract(address=contract_address, abi=abi)

        account = None
        if config.PRIVATE_KEY:
            account = Account.from_key(config.PRIVATE_KEY)
            logger.info(f"Service signer loaded: {account.address}")

        logger.info(f"Ledger clients ready on {network.name} (Chain ID: {network.chain_id}), contract {contract_address}")

        return LedgerClients(
            web3=web3,
            contract=contract,
            contract_address=contract_address,
            abi=abi,
            network=network,
            account=account
        )
