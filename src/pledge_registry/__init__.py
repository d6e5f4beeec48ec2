# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
pledge-registry — recurring patron-to-creator pledges gated by block height.

Quick start::

    from pledge_registry import CallContext, PledgeRegistry

    registry = PledgeRegistry()
    registry.set_escrow_reference(CallContext(caller="admin", height=0), "escrow")

    result = registry.create_pledge(
        CallContext(caller="alice", height=0),
        creator="bob", amount=100, interval=4320, start_block=0, duration=12,
        currency="STX", grace_period=7, penalty_rate=5, perk_threshold=50,
    )
    if result.ok:
        registry.execute_payment(CallContext(caller="keeper", height=4320), result.value)
"""

from pledge_registry.config import RegistryConfig, build_settings
from pledge_registry.errors import (
    AuthorizationError,
    PledgeErrorCode,
    PledgeRegistryError,
    PledgeStateError,
    PledgeValidationError,
    RegistryConfigurationError,
    error_for_code,
)
from pledge_registry.pledge import (
    apply_cancellation,
    apply_payment,
    apply_update,
    build_pledge,
    check_new_pledge,
    check_patron_access,
    check_payment,
    check_update,
    is_payment_due,
    next_due_block,
)
from pledge_registry.query import (
    build_due_statuses,
    build_indexes,
    build_status,
    indexes_consistent,
)
from pledge_registry.registry import PledgeRegistry
from pledge_registry.storage import MemoryStorage, PledgeStorage
from pledge_registry.transfer import build_transfer, filter_transfers
from pledge_registry.types import (
    DEFAULT_CURRENCIES,
    CallContext,
    Pledge,
    PledgeStatus,
    PledgeUpdate,
    RegistryResult,
    RegistrySettings,
    TransferFilter,
    TransferInstruction,
)

__all__ = [
    # Core class
    "PledgeRegistry",
    # Types
    "DEFAULT_CURRENCIES",
    "CallContext",
    "Pledge",
    "PledgeUpdate",
    "PledgeStatus",
    "TransferInstruction",
    "TransferFilter",
    "RegistrySettings",
    "RegistryResult",
    "RegistryConfig",
    # Errors
    "PledgeErrorCode",
    "PledgeRegistryError",
    "AuthorizationError",
    "PledgeValidationError",
    "PledgeStateError",
    "RegistryConfigurationError",
    "error_for_code",
    # Storage
    "PledgeStorage",
    "MemoryStorage",
    # Utilities
    "build_settings",
    "check_new_pledge",
    "check_patron_access",
    "check_update",
    "check_payment",
    "build_pledge",
    "next_due_block",
    "is_payment_due",
    "apply_update",
    "apply_payment",
    "apply_cancellation",
    "build_transfer",
    "filter_transfers",
    "build_status",
    "build_due_statuses",
    "build_indexes",
    "indexes_consistent",
]
