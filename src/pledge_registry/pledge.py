# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Pure pledge helpers: parameter checks, construction, and due-block arithmetic.

Nothing here touches storage. Each ``check_*`` function returns the first
failing :class:`~pledge_registry.errors.PledgeErrorCode` or ``None``; the
registry applies writes only after a ``None``.
"""

from __future__ import annotations

from pledge_registry.errors import PledgeErrorCode
from pledge_registry.types import CallContext, Pledge, PledgeUpdate, RegistrySettings


def _is_whole(value: object) -> bool:
    # Amounts, heights and counts are integers; bool is an int subclass.
    return isinstance(value, int) and not isinstance(value, bool)


def check_new_pledge(
    settings: RegistrySettings,
    context: CallContext,
    creator: str,
    amount: int,
    interval: int,
    start_block: int,
    duration: int,
    currency: str,
    grace_period: int,
    penalty_rate: int,
    perk_threshold: int,
) -> PledgeErrorCode | None:
    """Validate creation parameters in their fixed order."""
    if settings.next_pledge_id >= settings.max_pledges:
        return PledgeErrorCode.MAX_PLEDGES_EXCEEDED
    if creator == context.caller:
        return PledgeErrorCode.INVALID_CREATOR
    if not _is_whole(amount) or amount < settings.min_amount:
        return PledgeErrorCode.INVALID_AMOUNT
    if not _is_whole(interval) or interval <= 0:
        return PledgeErrorCode.INVALID_INTERVAL
    if not _is_whole(duration) or duration <= 0:
        return PledgeErrorCode.INVALID_DURATION
    if not _is_whole(start_block) or start_block < context.height:
        return PledgeErrorCode.INVALID_START_BLOCK
    if currency not in settings.accepted_currencies:
        return PledgeErrorCode.INVALID_CURRENCY
    if not _is_whole(grace_period) or not 0 <= grace_period <= settings.max_grace_period:
        return PledgeErrorCode.INVALID_GRACE_PERIOD
    if not _is_whole(penalty_rate) or not 0 <= penalty_rate <= settings.max_penalty_rate:
        return PledgeErrorCode.INVALID_PENALTY
    if not _is_whole(perk_threshold) or perk_threshold <= 0:
        return PledgeErrorCode.INVALID_PERK_THRESHOLD
    if settings.escrow_reference is None:
        return PledgeErrorCode.ESCROW_NOT_SET
    return None


def check_patron_access(pledge: Pledge | None, context: CallContext) -> PledgeErrorCode | None:
    """Shared guard for patron-only operations (update and cancel)."""
    if pledge is None:
        return PledgeErrorCode.PLEDGE_NOT_FOUND
    if pledge.patron != context.caller:
        return PledgeErrorCode.NOT_AUTHORIZED
    if not pledge.active:
        return PledgeErrorCode.PLEDGE_INACTIVE
    return None


def check_update(
    pledge: Pledge | None,
    settings: RegistrySettings,
    context: CallContext,
    amount: int,
    interval: int,
    duration: int,
) -> PledgeErrorCode | None:
    access_error = check_patron_access(pledge, context)
    if access_error is not None:
        return access_error
    if not _is_whole(amount) or amount < settings.min_amount:
        return PledgeErrorCode.INVALID_AMOUNT
    if not _is_whole(interval) or interval <= 0:
        return PledgeErrorCode.INVALID_INTERVAL
    if not _is_whole(duration) or duration <= 0:
        return PledgeErrorCode.INVALID_DURATION
    return None


def check_payment(
    pledge: Pledge | None,
    settings: RegistrySettings,
    context: CallContext,
) -> PledgeErrorCode | None:
    """
    Decide whether a payment may be executed at ``context.height``.

    An exhausted quota reports PAYMENT_NOT_DUE, the same code as a payment
    requested too early.
    """
    if pledge is None:
        return PledgeErrorCode.PLEDGE_NOT_FOUND
    if not pledge.active:
        return PledgeErrorCode.PLEDGE_INACTIVE
    if context.height < next_due_block(pledge):
        return PledgeErrorCode.PAYMENT_NOT_DUE
    if pledge.payments_made >= pledge.duration:
        return PledgeErrorCode.PAYMENT_NOT_DUE
    if settings.escrow_reference is None:
        return PledgeErrorCode.ESCROW_NOT_SET
    return None


def build_pledge(
    pledge_id: int,
    context: CallContext,
    creator: str,
    amount: int,
    interval: int,
    start_block: int,
    duration: int,
    currency: str,
    grace_period: int,
    penalty_rate: int,
    perk_threshold: int,
) -> Pledge:
    """Build a fresh, active Pledge owned by the calling patron."""
    return Pledge(
        id=pledge_id,
        patron=context.caller,
        creator=creator,
        amount=amount,
        interval=interval,
        start_block=start_block,
        duration=duration,
        payments_made=0,
        last_payment_block=start_block,
        active=True,
        currency=currency,
        grace_period=grace_period,
        penalty_rate=penalty_rate,
        perk_threshold=perk_threshold,
    )


def next_due_block(pledge: Pledge) -> int:
    """Height at which the next payment becomes eligible."""
    return pledge.last_payment_block + pledge.interval


def is_payment_due(pledge: Pledge, height: int) -> bool:
    """True when an active pledge with quota left has reached its due block."""
    return (
        pledge.active
        and pledge.payments_made < pledge.duration
        and height >= next_due_block(pledge)
    )


def apply_update(
    pledge: Pledge,
    context: CallContext,
    amount: int,
    interval: int,
    duration: int,
) -> tuple[Pledge, PledgeUpdate]:
    """
    Return an updated copy of the pledge and the matching update snapshot.

    Only amount, interval and duration change.
    """
    updated = pledge.model_copy(
        update={"amount": amount, "interval": interval, "duration": duration}
    )
    snapshot = PledgeUpdate(
        pledge_id=pledge.id,
        amount=amount,
        interval=interval,
        duration=duration,
        height=context.height,
        updater=context.caller,
    )
    return updated, snapshot


def apply_payment(pledge: Pledge, context: CallContext) -> Pledge:
    # The next due block is measured from the actual payment height, so late
    # payments push every later due date forward.
    return pledge.model_copy(
        update={
            "payments_made": pledge.payments_made + 1,
            "last_payment_block": context.height,
        }
    )


def apply_cancellation(pledge: Pledge) -> Pledge:
    return pledge.model_copy(update={"active": False})
