# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import logging

from pledge_registry.config import RegistryConfig, build_settings
from pledge_registry.errors import PledgeErrorCode
from pledge_registry.pledge import (
    apply_cancellation,
    apply_payment,
    apply_update,
    build_pledge,
    check_new_pledge,
    check_patron_access,
    check_payment,
    check_update,
    next_due_block,
)
from pledge_registry.query import build_due_statuses, build_status, indexes_consistent
from pledge_registry.storage.interface import PledgeStorage
from pledge_registry.storage.memory import MemoryStorage
from pledge_registry.transfer import build_transfer, filter_transfers
from pledge_registry.types import (
    CallContext,
    Pledge,
    PledgeStatus,
    PledgeUpdate,
    RegistryResult,
    RegistrySettings,
    TransferFilter,
    TransferInstruction,
)

logger = logging.getLogger("pledge_registry")


class PledgeRegistry:
    """
    Record manager for recurring pledges between patrons and creators.

    Design contract
    ---------------
    - Every operation takes a :class:`CallContext` carrying the caller and the
      current block height. The registry never reads them from anywhere else.
    - Mutating operations return a :class:`RegistryResult`. A failed result
      means no state was written: every check runs before the first write.
    - Payments are recorded as :class:`TransferInstruction` entries for the
      escrow holder. The registry never moves funds.
    - Cancellation is one-way. Nothing is ever deleted.

    Usage
    -----
    ::

        registry = PledgeRegistry()
        admin = CallContext(caller="admin", height=0)
        registry.set_escrow_reference(admin, "escrow")

        patron = CallContext(caller="alice", height=0)
        pledge_id = registry.create_pledge(
            patron, creator="bob", amount=100, interval=4320, start_block=0,
            duration=12, currency="STX", grace_period=7, penalty_rate=5,
            perk_threshold=50,
        ).unwrap()

        result = registry.execute_payment(CallContext(caller="keeper", height=4320), pledge_id)
        if result.ok:
            forward_to_escrow(registry.get_transfers()[-1])
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        storage: PledgeStorage | None = None,
    ) -> None:
        self._settings: RegistrySettings = build_settings(config)
        self._storage: PledgeStorage = storage if storage is not None else MemoryStorage()

    # ─── Configuration ────────────────────────────────────────────────────────

    def set_escrow_reference(self, context: CallContext, reference: str) -> RegistryResult:
        """Record the escrow holder identity. Always succeeds."""
        self._settings.escrow_reference = reference
        logger.info(
            "escrow_reference_set",
            extra={"caller": context.caller, "escrow_reference": reference},
        )
        return RegistryResult.success()

    def set_authority_reference(self, context: CallContext, reference: str) -> RegistryResult:
        """Record the authority gate identity. Always succeeds."""
        self._settings.authority_reference = reference
        logger.info(
            "authority_reference_set",
            extra={"caller": context.caller, "authority_reference": reference},
        )
        return RegistryResult.success()

    def set_min_amount(self, context: CallContext, value: int) -> RegistryResult:
        """
        Overwrite the minimum pledge amount.

        Only requires that an authority reference has been configured; the
        caller is not compared against it.
        """
        if self._settings.authority_reference is None:
            return self._reject("set_min_amount", context, PledgeErrorCode.AUTHORITY_NOT_VERIFIED)

        previous = self._settings.min_amount
        self._settings.min_amount = value
        logger.info(
            "min_amount_set",
            extra={"caller": context.caller, "previous": previous, "min_amount": value},
        )
        return RegistryResult.success()

    # ─── Pledge lifecycle ─────────────────────────────────────────────────────

    def create_pledge(
        self,
        context: CallContext,
        creator: str,
        amount: int,
        interval: int | None,
        start_block: int,
        duration: int,
        currency: str,
        grace_period: int,
        penalty_rate: int,
        perk_threshold: int,
    ) -> RegistryResult:
        """
        Create a pledge from the caller (the patron) to ``creator``.

        Passing ``interval=None`` uses the registry's default interval.
        On success the result value is the new pledge id.
        """
        if interval is None:
            interval = self._settings.default_interval

        error = check_new_pledge(
            self._settings,
            context,
            creator=creator,
            amount=amount,
            interval=interval,
            start_block=start_block,
            duration=duration,
            currency=currency,
            grace_period=grace_period,
            penalty_rate=penalty_rate,
            perk_threshold=perk_threshold,
        )
        if error is not None:
            return self._reject("create_pledge", context, error)

        pledge_id = self._settings.next_pledge_id
        pledge = build_pledge(
            pledge_id,
            context,
            creator=creator,
            amount=amount,
            interval=interval,
            start_block=start_block,
            duration=duration,
            currency=currency,
            grace_period=grace_period,
            penalty_rate=penalty_rate,
            perk_threshold=perk_threshold,
        )

        self._storage.save_pledge(pledge)
        self._storage.append_patron_index(pledge.patron, pledge_id)
        self._storage.append_creator_index(pledge.creator, pledge_id)
        self._settings.next_pledge_id = pledge_id + 1

        logger.info(
            "pledge_created",
            extra={
                "pledge_id": pledge_id,
                "patron": pledge.patron,
                "creator": pledge.creator,
                "amount": pledge.amount,
                "currency": pledge.currency,
                "height": context.height,
            },
        )
        return RegistryResult.success(pledge_id)

    def update_pledge(
        self,
        context: CallContext,
        pledge_id: int,
        amount: int,
        interval: int,
        duration: int,
    ) -> RegistryResult:
        """
        Replace a pledge's amount, interval and duration.

        Only the patron may update an active pledge. The change is recorded as
        the pledge's latest :class:`PledgeUpdate`, replacing any earlier one.
        """
        pledge = self._storage.get_pledge(pledge_id)
        error = check_update(pledge, self._settings, context, amount, interval, duration)
        if error is not None:
            return self._reject("update_pledge", context, error, pledge_id)
        assert pledge is not None  # guaranteed by check_update() returning None

        updated, snapshot = apply_update(pledge, context, amount, interval, duration)
        self._storage.save_pledge(updated)
        self._storage.save_update(snapshot)

        logger.info(
            "pledge_updated",
            extra={
                "pledge_id": pledge_id,
                "amount": amount,
                "interval": interval,
                "duration": duration,
                "height": context.height,
            },
        )
        return RegistryResult.success()

    def cancel_pledge(self, context: CallContext, pledge_id: int) -> RegistryResult:
        """Deactivate a pledge. Only the patron may cancel, and only once."""
        pledge = self._storage.get_pledge(pledge_id)
        error = check_patron_access(pledge, context)
        if error is not None:
            return self._reject("cancel_pledge", context, error, pledge_id)
        assert pledge is not None

        self._storage.save_pledge(apply_cancellation(pledge))

        logger.info(
            "pledge_cancelled",
            extra={"pledge_id": pledge_id, "payments_made": pledge.payments_made},
        )
        return RegistryResult.success()

    def execute_payment(self, context: CallContext, pledge_id: int) -> RegistryResult:
        """
        Execute the next payment of a pledge if one is due.

        Any caller may trigger a due payment. On success a transfer of the
        pledge amount from the escrow holder to the creator is recorded,
        ``payments_made`` increments, and ``last_payment_block`` becomes the
        current height.
        """
        pledge = self._storage.get_pledge(pledge_id)
        error = check_payment(pledge, self._settings, context)
        if error is not None:
            return self._reject("execute_payment", context, error, pledge_id)
        assert pledge is not None
        escrow_reference = self._settings.escrow_reference
        assert escrow_reference is not None

        transfer = build_transfer(
            index=len(self._storage.list_transfers()),
            pledge=pledge,
            escrow_reference=escrow_reference,
            height=context.height,
        )
        paid = apply_payment(pledge, context)

        self._storage.save_transfer(transfer)
        self._storage.save_pledge(paid)

        logger.info(
            "payment_executed",
            extra={
                "pledge_id": pledge_id,
                "amount": transfer.amount,
                "source": transfer.source,
                "destination": transfer.destination,
                "payments_made": paid.payments_made,
                "height": context.height,
            },
        )
        return RegistryResult.success()

    def check_payment(self, context: CallContext, pledge_id: int) -> RegistryResult:
        """
        Report what ``execute_payment`` would return, without executing it.

        This method is PURELY READ-ONLY.
        """
        error = check_payment(self._storage.get_pledge(pledge_id), self._settings, context)
        if error is not None:
            return RegistryResult.failure(error)
        return RegistryResult.success()

    # ─── Queries ──────────────────────────────────────────────────────────────

    def get_pledge(self, pledge_id: int) -> Pledge | None:
        """Return a copy of the pledge, or None if the id is unknown."""
        return self._storage.get_pledge(pledge_id)

    def get_pledge_count(self) -> int:
        """Number of pledges ever created, cancelled ones included."""
        return self._settings.next_pledge_id

    def get_pledge_update(self, pledge_id: int) -> PledgeUpdate | None:
        return self._storage.get_update(pledge_id)

    def get_pledges_by_patron(self, patron: str) -> list[int]:
        return self._storage.list_by_patron(patron)

    def get_pledges_by_creator(self, creator: str) -> list[int]:
        return self._storage.list_by_creator(creator)

    def next_payment_block(self, pledge_id: int) -> int | None:
        """Height at which the pledge's next payment becomes eligible."""
        pledge = self._storage.get_pledge(pledge_id)
        if pledge is None:
            return None
        return next_due_block(pledge)

    def get_status(self, pledge_id: int, height: int) -> PledgeStatus | None:
        pledge = self._storage.get_pledge(pledge_id)
        if pledge is None:
            return None
        return build_status(pledge, height)

    def list_due(self, height: int) -> list[PledgeStatus]:
        """Return the pledges with a payment due at ``height``, most overdue first."""
        return build_due_statuses(self._storage.list_pledges(), height)

    def get_transfers(
        self,
        transfer_filter: TransferFilter | None = None,
    ) -> list[TransferInstruction]:
        """
        Return recorded transfer instructions, optionally filtered.

        All filter fields are AND-ed together. Pass None to return all records.
        """
        return filter_transfers(self._storage.list_transfers(), transfer_filter)

    def settings(self) -> RegistrySettings:
        """Return a copy of the live settings (mutation has no effect)."""
        return self._settings.model_copy(deep=True)

    def verify_indexes(self) -> bool:
        """True when the patron/creator indexes agree with the pledge store."""
        return indexes_consistent(self._storage)

    # ─── Private helpers ──────────────────────────────────────────────────────

    def _reject(
        self,
        operation: str,
        context: CallContext,
        code: PledgeErrorCode,
        pledge_id: int | None = None,
    ) -> RegistryResult:
        logger.debug(
            "operation_rejected",
            extra={
                "operation": operation,
                "caller": context.caller,
                "height": context.height,
                "pledge_id": pledge_id,
                "error": code.name,
            },
        )
        return RegistryResult.failure(code)
