from .blockchain import LedgerService

__all__ = ['LedgerService']
