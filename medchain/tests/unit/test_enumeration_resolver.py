# tests/unit/test_enumeration_resolver.py
import pytest
from web3.exceptions import ABIEventNotFound

from medchain.config.settings import TestingConfig
from medchain.core.exceptions import LedgerError
from medchain.models.enums import ManufacturerStatus
from medchain.services.blockchain.ledger_service import LedgerService
from medchain.services.blockchain.enumeration_resolver import (
    MANUFACTURER_REGISTERED_TOPIC, address_from_topic
)
from medchain.tests.helpers import (
    CONTRACT_ADDRESS, contract_call, manufacturer_tuple, manufacturer_lookup
)

ALPHA = '0x1111111111111111111111111111111111111111'
BRAVO = '0x2222222222222222222222222222222222222222'
CHARLIE = '0x3333333333333333333333333333333333333333'


class EventlessEvents:
    """contract.events for an ABI that predates ManufacturerRegistered"""

    def __getattr__(self, name):
        raise ABIEventNotFound(f"The event '{name}' was not found in this contract's abi.")


def registered_event(address):
    return {'event': 'ManufacturerRegistered', 'args': {'manufacturer': address, 'name': 'x'}}


def registration_log(address):
    return {'topics': [bytes(32), bytes(12) + bytes.fromhex(address[2:])]}


@pytest.fixture
def three_manufacturers(fake_contract):
    manufacturer_lookup(fake_contract, {
        ALPHA: manufacturer_tuple(ALPHA, 'Alpha', registered_at=1600000000),
        BRAVO: manufacturer_tuple(BRAVO, 'Bravo', registered_at=1700000000),
        CHARLIE: manufacturer_tuple(CHARLIE, 'Charlie', registered_at=1650000000),
    })


@pytest.fixture
def registration_events(fake_contract):
    return fake_contract.events.ManufacturerRegistered.get_logs


def test_direct_enumeration_sorted_newest_first(ledger_service, fake_contract, fake_web3, three_manufacturers):
    fake_contract.functions.getAllManufacturerAddresses.return_value = contract_call([ALPHA, BRAVO, CHARLIE])

    manufacturers = ledger_service.enumerate_manufacturers()

    assert [m.name for m in manufacturers] == ['Bravo', 'Charlie', 'Alpha']
    fake_web3.eth.get_logs.assert_not_called()
    fake_contract.events.ManufacturerRegistered.get_logs.assert_not_called()


def test_direct_enumeration_skips_failed_hydration(ledger_service, fake_contract, fake_web3):
    manufacturer_lookup(fake_contract, {
        ALPHA: manufacturer_tuple(ALPHA, 'Alpha', registered_at=1600000000),
        BRAVO: Exception('execution reverted: Manufacturer not registered'),
        CHARLIE: manufacturer_tuple(CHARLIE, 'Charlie', registered_at=1650000000),
    })
    fake_contract.functions.getAllManufacturerAddresses.return_value = contract_call([ALPHA, BRAVO, CHARLIE])

    manufacturers = ledger_service.enumerate_manufacturers()

    assert [m.name for m in manufacturers] == ['Charlie', 'Alpha']
    fake_web3.eth.get_logs.assert_not_called()
    fake_contract.events.ManufacturerRegistered.get_logs.assert_not_called()


def test_empty_direct_result_does_not_fall_back(ledger_service, fake_contract, fake_web3):
    fake_contract.functions.getAllManufacturerAddresses.return_value = contract_call([])

    assert ledger_service.enumerate_manufacturers() == []
    fake_web3.eth.get_logs.assert_not_called()
    fake_contract.events.ManufacturerRegistered.get_logs.assert_not_called()
    fake_contract.functions.getContractStats.assert_not_called()


def test_event_scan_when_primitive_missing(ledger_service, fake_contract, fake_web3, three_manufacturers,
                                           registration_events):
    fake_contract.functions.getAllManufacturerAddresses.return_value = contract_call(
        side_effect=Exception('method not found'))
    fake_web3.eth.block_number = 120000
    registration_events.return_value = [
        registered_event(ALPHA),
        registered_event(BRAVO),
        registered_event(ALPHA),
        registered_event(CHARLIE),
    ]

    manufacturers = ledger_service.enumerate_manufacturers()

    assert [m.name for m in manufacturers] == ['Bravo', 'Charlie', 'Alpha']
    assert fake_contract.functions.getManufacturer.call_count == 3
    registration_events.assert_called_once_with(from_block=120000 - 50000, to_block='latest')
    fake_web3.eth.get_logs.assert_not_called()


def test_event_scan_skips_failed_hydration(ledger_service, fake_contract, registration_events):
    manufacturer_lookup(fake_contract, {
        ALPHA: manufacturer_tuple(ALPHA, 'Alpha', registered_at=1600000000),
        BRAVO: Exception('execution reverted: Manufacturer not registered'),
        CHARLIE: manufacturer_tuple(CHARLIE, 'Charlie', registered_at=1650000000),
    })
    fake_contract.functions.getAllManufacturerAddresses.side_effect = Exception('method not found')
    registration_events.return_value = [
        registered_event(ALPHA),
        registered_event(BRAVO),
        registered_event(CHARLIE),
    ]

    manufacturers = ledger_service.enumerate_manufacturers()

    assert [m.name for m in manufacturers] == ['Charlie', 'Alpha']
    assert fake_contract.functions.getManufacturer.call_count == 3


def test_raw_topic_scan_when_abi_lacks_event(ledger_service, fake_contract, fake_web3, three_manufacturers):
    fake_contract.functions.getAllManufacturerAddresses.side_effect = Exception('method not found')
    fake_contract.events = EventlessEvents()
    fake_web3.eth.block_number = 120000
    fake_web3.eth.get_logs.return_value = [
        registration_log(ALPHA),
        registration_log(BRAVO),
        registration_log(ALPHA),
    ]

    manufacturers = ledger_service.enumerate_manufacturers()

    assert [m.name for m in manufacturers] == ['Bravo', 'Alpha']
    log_filter = fake_web3.eth.get_logs.call_args[0][0]
    assert log_filter['fromBlock'] == 120000 - 50000
    assert log_filter['address'] == CONTRACT_ADDRESS
    assert log_filter['topics'] == [MANUFACTURER_REGISTERED_TOPIC]


def test_event_scan_window_is_configurable(clients, fake_contract, fake_web3, registration_events):
    class NarrowWindowConfig(TestingConfig):
        EVENT_SCAN_BLOCK_WINDOW = 1000

    fake_contract.functions.getAllManufacturerAddresses.side_effect = Exception('method not found')
    fake_web3.eth.block_number = 400
    registration_events.return_value = []

    assert LedgerService(clients, NarrowWindowConfig).enumerate_manufacturers() == []
    assert registration_events.call_args.kwargs['from_block'] == 0


def test_summary_fallback_when_both_tiers_fail(ledger_service, fake_contract, registration_events):
    fake_contract.functions.getAllManufacturerAddresses.side_effect = Exception('method not found')
    registration_events.side_effect = Exception('query returned more than 10000 results')
    fake_contract.functions.getContractStats.return_value = contract_call((12, 7, 1, 4, ALPHA))

    manufacturers = ledger_service.enumerate_manufacturers()

    assert len(manufacturers) == 1
    placeholder = manufacturers[0]
    assert placeholder.status == ManufacturerStatus.ENUMERATION_LIMITED
    assert placeholder.total_count == 7
    assert placeholder.to_dict()['status'] == 'enumeration_limited'
    assert 'contract' in placeholder.to_dict()['note']


def test_every_tier_failing_raises(ledger_service, fake_contract, registration_events):
    fake_contract.functions.getAllManufacturerAddresses.side_effect = Exception('method not found')
    registration_events.side_effect = Exception('could not detect network')
    fake_contract.functions.getContractStats.return_value = contract_call(side_effect=Exception('boom'))

    with pytest.raises(LedgerError) as exc_info:
        ledger_service.enumerate_manufacturers()
    assert 'Failed to fetch manufacturers' in exc_info.value.message
    assert 'contract: method not found' in exc_info.value.message


def test_address_from_topic():
    topic = bytes(12) + bytes.fromhex(BRAVO[2:])

    assert address_from_topic(topic).lower() == BRAVO
