# models/stats.py
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class ContractStats:
    total_batches: int
    total_manufacturers: int
    total_recalled_batches: int
    total_expired_scans: int
    admin_address: str
    network_name: Optional[str] = None
    chain_id: Optional[int] = None

    @property
    def active_batches(self) -> int:
        return self.total_batches - self.total_recalled_batches

    @property
    def recall_rate(self) -> str:
        """Recalled share of all batches as a percentage string, e.g. '12.50'"""
        if self.total_batches <= 0:
            return '0.00'
        return f"{self.total_recalled_batches / self.total_batches * 100:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_batches": self.total_batches,
            "total_manufacturers": self.total_manufacturers,
            "total_recalled_batches": self.total_recalled_batches,
            "total_expired_scans": self.total_expired_scans,
            "active_batches": self.active_batches,
            "recall_rate": self.recall_rate,
            "admin_address": self.admin_address,
            "network_name": self.network_name,
            "chain_id": self.chain_id
        }


@dataclass
class WalletBalance:
    address: str
    balance_wei: int
    balance: str
    currency: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "balance_wei": str(self.balance_wei),
            "balance": self.balance,
            "currency": self.currency
        }
