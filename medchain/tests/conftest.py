# tests/conftest.py
import pytest
from unittest.mock import MagicMock

from medchain.config.settings import TestingConfig
from medchain.config.blockchain import LedgerClients, get_network_config
from medchain.services.blockchain.ledger_service import LedgerService
from medchain.tests.helpers import CONTRACT_ADDRESS, SIGNER_ADDRESS


class WritesEnabledConfig(TestingConfig):
    DEV_ALLOW_SERVER_WRITES = True
    PRIVATE_KEY = '0x' + '11' * 32


@pytest.fixture
def fake_contract():
    return MagicMock(name='contract')


@pytest.fixture
def fake_web3():
    web3 = MagicMock(name='web3')
    web3.eth.block_number = 1000
    return web3


@pytest.fixture
def fake_account():
    account = MagicMock(name='account')
    account.address = SIGNER_ADDRESS
    account.sign_transaction.return_value.raw_transaction = b'\xf8\x6b'
    return account


@pytest.fixture
def network():
    return get_network_config('sepolia', 11155111)


@pytest.fixture
def clients(fake_web3, fake_contract, network):
    return LedgerClients(
        web3=fake_web3,
        contract=fake_contract,
        contract_address=CONTRACT_ADDRESS,
        abi=[{'name': 'registerManufacturer', 'type': 'function'}],
        network=network
    )


@pytest.fixture
def ledger_service(clients):
    return LedgerService(clients, TestingConfig)


@pytest.fixture
def write_service(fake_web3, fake_contract, fake_account, network):
    clients = LedgerClients(
        web3=fake_web3,
        contract=fake_contract,
        contract_address=CONTRACT_ADDRESS,
        abi=[],
        network=network,
        account=fake_account
    )
    return LedgerService(clients, WritesEnabledConfig)
