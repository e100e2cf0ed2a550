"""
Manufacturer Enumeration Resolver

Not every deployed MedChain contract exposes getAllManufacturerAddresses, so
the full manufacturer list is resolved through three tiers tried in order:

1. direct enumeration via getAllManufacturerAddresses
2. a scan of ManufacturerRegistered events over a trailing block window
3. a single placeholder record carrying the total from getContractStats

A tier hands over to the next one only when its own ledger primitive fails.
An empty but successful tier result is returned as-is.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from web3 import Web3
from web3.exceptions import ABIEventNotFound, NoABIEventsFound

from medchain.core.exceptions import LedgerError
from medchain.models.enums import ErrorCategory
from medchain.models.manufacturer import ManufacturerRecord
from medchain.services.blockchain.error_classifier import classify_error

logger = logging.getLogger(__name__)

MANUFACTURER_REGISTERED_SIGNATURE = 'ManufacturerRegistered(address,string,string,uint256)'
MANUFACTURER_REGISTERED_TOPIC = Web3.to_hex(Web3.keccak(text=MANUFACTURER_REGISTERED_SIGNATURE))
DEFAULT_EVENT_SCAN_WINDOW = 50000


@dataclass
class TierResult:
    """Outcome of a single enumeration tier"""
    tier: str
    success: bool
    manufacturers: List[ManufacturerRecord] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, tier, manufacturers):
        return cls(tier=tier, success=True, manufacturers=manufacturers)

    @classmethod
    def failed(cls, tier, error):
        return cls(tier=tier, success=False, error=error)


def address_from_topic(topic) -> str:
    """Indexed address topics are 32 bytes, left-padded"""
    return Web3.to_checksum_address('0x' + bytes(topic)[-20:].hex())


def sort_by_registration(manufacturers: List[ManufacturerRecord]) -> List[ManufacturerRecord]:
    return sorted(manufacturers, key=lambda m: m.registered_at, reverse=True)


class ManufacturerEnumerationResolver:
    """Resolves the full manufacturer list from a ledger that may not index it"""

    def __init__(self, clients, hydrate: Callable[[str], ManufacturerRecord],
                 read_stats: Callable, event_scan_window: int = DEFAULT_EVENT_SCAN_WINDOW,
                 max_workers: int = 4):
        self.clients = clients
        self.hydrate = hydrate
        self.read_stats = read_stats
        self.event_scan_window = event_scan_window
        self.max_workers = max(1, max_workers)

    def resolve(self) -> List[ManufacturerRecord]:
        """Run the tiers in order and return the first successful result"""
        tiers = [
            self.from_contract,
            self.from_events,
            self.from_stats_summary
        ]

        failures = []
        for tier in tiers:
            result = tier()
            if result.success:
                logger.info(f"Manufacturer enumeration via {result.tier}: {len(result.manufacturers)} records")
                return result.manufacturers

            logger.warning(f"Manufacturer enumeration tier '{result.tier}' failed: {result.error}")
            failures.append(f"{result.tier}: {result.error}")

        raise LedgerError(
            ErrorCategory.UNCLASSIFIED,
            f"Failed to fetch manufacturers: {'; '.join(failures)}"
        )

    def hydrate_all(self, addresses: Iterable[str]) -> List[ManufacturerRecord]:
        """Hydrate each address independently; failed addresses are logged and skipped"""
        addresses = list(addresses)
        if not addresses:
            return []

        def hydrate_one(address):
            try:
                return self.hydrate(address)
            except Exception as e:
                logger.warning(f"Failed to load manufacturer {address}: {classify_error(e).message}")
                return None

        workers = min(self.max_workers, len(addresses))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='hydrate') as executor:
            results = list(executor.map(hydrate_one, addresses))

        manufacturers = [m for m in results if m is not None]
        skipped = len(addresses) - len(manufacturers)
        if skipped:
            logger.warning(f"Skipped {skipped} of {len(addresses)} manufacturers during hydration")

        return sort_by_registration(manufacturers)

    def from_contract(self) -> TierResult:
        """Tier 1: native address list"""
        tier = 'contract'
        try:
            addresses = self.clients.contract.functions.getAllManufacturerAddresses().call()
        except Exception as e:
            return TierResult.failed(tier, classify_error(e).message)

        logger.debug(f"Found {len(addresses)} manufacturer addresses")
        return TierResult.ok(tier, self.hydrate_all(addresses))

    def registration_addresses(self, from_block: int) -> List[str]:
        """Manufacturer addresses from ManufacturerRegistered logs, in log order"""
        try:
            event = self.clients.contract.events.ManufacturerRegistered
        except (ABIEventNotFound, NoABIEventsFound):
            event = None

        if event is not None:
            events = event.get_logs(from_block=from_block, to_block='latest')
            return [e['args']['manufacturer'] for e in events]

        # Loaded ABI predates the event; match on the topic hash instead
        logger.debug("ManufacturerRegistered missing from ABI, filtering on raw topic")
        logs = self.clients.web3.eth.get_logs({
            'address': self.clients.contract_address,
            'fromBlock': from_block,
            'toBlock': 'latest',
            'topics': [MANUFACTURER_REGISTERED_TOPIC]
        })
        return [address_from_topic(log['topics'][1]) for log in logs if len(log['topics']) > 1]

    def from_events(self) -> TierResult:
        """Tier 2: ManufacturerRegistered logs over the trailing block window"""
        tier = 'events'
        try:
            current_block = self.clients.web3.eth.block_number
            from_block = max(0, current_block - self.event_scan_window)
            logged = self.registration_addresses(from_block)
            # dict keeps first-seen order while dropping repeat registrations
            addresses = list(dict.fromkeys(logged))
        except Exception as e:
            return TierResult.failed(tier, classify_error(e).message)

        logger.debug(f"Found {len(logged)} registration events, {len(addresses)} unique manufacturers "
                     f"(blocks {from_block}-{current_block})")
        return TierResult.ok(tier, self.hydrate_all(addresses))

    def from_stats_summary(self) -> TierResult:
        """Tier 3: degraded single-record summary"""
        tier = 'stats_summary'
        try:
            stats = self.read_stats()
        except Exception as e:
            return TierResult.failed(tier, classify_error(e).message)

        return TierResult.ok(tier, [ManufacturerRecord.enumeration_limited(stats.total_manufacturers)])
