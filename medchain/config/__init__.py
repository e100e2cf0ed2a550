from .settings import Config, DevelopmentConfig, ProductionConfig, TestingConfig, get_config
from .blockchain import BlockchainConfig, LedgerClients, NetworkConfig, get_network_config, load_contract_abi

__all__ = [
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'get_config',
    'BlockchainConfig', 'LedgerClients', 'NetworkConfig', 'get_network_config', 'load_contract_abi'
]
