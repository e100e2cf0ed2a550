# config/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default='false'):
    return os.getenv(name, default).strip().lower() == 'true'


class Config:
    """Base configuration"""

    # Blockchain
    BLOCKCHAIN_RPC_URL = os.getenv('BLOCKCHAIN_RPC_URL') or os.getenv('SEPOLIA_RPC_URL')
    CONTRACT_ADDRESS = os.getenv('CONTRACT_ADDRESS')
    CHAIN_ID = int(os.getenv('CHAIN_ID', '11155111'))
    NETWORK = os.getenv('NETWORK', 'sepolia')
    PRIVATE_KEY = os.getenv('PRIVATE_KEY')
    CONTRACT_ABI_PATH = os.getenv('CONTRACT_ABI_PATH')

    # Server-signed writes are a dev/ops escape hatch; wallets sign in normal operation
    DEV_ALLOW_SERVER_WRITES = _env_flag('DEV_ALLOW_SERVER_WRITES')

    # Gas settings
    DEFAULT_GAS_LIMIT = int(os.getenv('DEFAULT_GAS_LIMIT', '500000'))
    GAS_PRICE_GWEI = int(os.getenv('GAS_PRICE_GWEI', '20'))

    # Manufacturer enumeration
    EVENT_SCAN_BLOCK_WINDOW = int(os.getenv('EVENT_SCAN_BLOCK_WINDOW', '50000'))
    HYDRATION_WORKERS = int(os.getenv('HYDRATION_WORKERS', '4'))

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    FLASK_ENV = 'development'

    # More verbose logging in development
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    FLASK_ENV = 'production'

    # Never sign with the service key in production
    DEV_ALLOW_SERVER_WRITES = False

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True

    BLOCKCHAIN_RPC_URL = 'http://localhost:8545'
    CONTRACT_ADDRESS = '0x8018fBf212d88d0b537e6EeBcc836A29f9f45Eed'
    CHAIN_ID = 11155111
    NETWORK = 'sepolia'
    CONTRACT_ABI_PATH = None
    PRIVATE_KEY = None
    DEV_ALLOW_SERVER_WRITES = False

    DEFAULT_GAS_LIMIT = 500000
    GAS_PRICE_GWEI = 20
    EVENT_SCAN_BLOCK_WINDOW = 50000
    HYDRATION_WORKERS = 2
    LOG_FILE = None


def get_config():
    """Get configuration based on FLASK_ENV environment variable"""
    env = os.getenv('FLASK_ENV', 'development').lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }

    return config_map.get(env, DevelopmentConfig)


current_config = get_config()
