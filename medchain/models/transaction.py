# models/transaction.py
from dataclasses import dataclass, field
from typing import List, Dict, Any, Tuple

from medchain.models.enums import ErrorCategory


@dataclass(frozen=True)
class TransactionDescriptor:
    """Unsigned description of a contract write, handed to an external wallet"""
    contract_address: str
    method: str
    args: Tuple[Any, ...]
    abi: List[Dict[str, Any]] = field(default_factory=list, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_address": self.contract_address,
            "abi": self.abi,
            "method": self.method,
            "args": list(self.args)
        }


@dataclass(frozen=True)
class WriteReceipt:
    tx_hash: str
    block_number: int
    gas_used: int
    explorer_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "tx_hash": self.tx_hash,
            "block_number": self.block_number,
            "gas_used": str(self.gas_used),
            "explorer_url": self.explorer_url
        }


@dataclass(frozen=True)
class ClassifiedError:
    category: ErrorCategory
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "message": self.message
        }
