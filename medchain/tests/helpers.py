# tests/helpers.py
from unittest.mock import MagicMock

CONTRACT_ADDRESS = '0x8018fBf212d88d0b537e6EeBcc836A29f9f45Eed'
SIGNER_ADDRESS = '0x742d35Cc6634C0532925a3b844Bc454e4438f44e'


def contract_call(return_value=None, side_effect=None):
    """A bound contract function whose .call() returns or raises"""
    bound = MagicMock()
    bound.call.return_value = return_value
    if side_effect is not None:
        bound.call.side_effect = side_effect
    return bound


def manufacturer_tuple(address, name='Acme', registered_at=1700000000, is_verified=True, is_active=True):
    return (address, name, 'LIC-1', f'admin@{name.lower()}.com', is_verified, is_active, registered_at)


def manufacturer_lookup(contract, records):
    """Route getManufacturer(address) to records keyed by lowercase address; Exceptions are raised"""
    def get_manufacturer(address):
        value = records[address.lower()]
        if isinstance(value, Exception):
            return contract_call(side_effect=value)
        return contract_call(value)

    contract.functions.getManufacturer.side_effect = get_manufacturer
