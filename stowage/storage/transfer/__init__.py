"""
Stowage Storage Transfer Module.

Decides whether an uploaded object is moved or copied into a storage
backend, and carries that decision out.

Usage:
    >>> from stowage.storage.transfer import TransferService, TransferRequest, transfer_file
    >>>
    >>> # Quick transfer
    >>> stored = transfer_file(source, storage, "store", "a/b.png", relocate=True)
    >>>
    >>> # With a policy over several storages
    >>> service = TransferService(storages, policy=["cache", "store"])
    >>> stored = service.transfer(source, TransferRequest("store", "a/b.png"))
"""

from .policy import RelocationPolicy, as_policy
from .service import (
    TransferPlan,
    TransferRequest,
    TransferService,
    TransferStrategy,
    transfer_file,
)

__all__ = [
    "RelocationPolicy",
    "TransferPlan",
    "TransferRequest",
    "TransferService",
    "TransferStrategy",
    "as_policy",
    "transfer_file",
]
