# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from pledge_registry.pledge import is_payment_due, next_due_block
from pledge_registry.storage.interface import PledgeStorage
from pledge_registry.types import Pledge, PledgeStatus


def build_status(pledge: Pledge, height: int) -> PledgeStatus:
    """
    Derive a PledgeStatus snapshot for ``pledge`` as seen at ``height``.

    The snapshot is point-in-time and is not updated by later calls.
    """
    return PledgeStatus(
        pledge_id=pledge.id,
        active=pledge.active,
        payments_made=pledge.payments_made,
        remaining_payments=pledge.remaining_payments,
        next_due_block=next_due_block(pledge),
        payment_due=is_payment_due(pledge, height),
        height=height,
    )


def build_due_statuses(pledges: list[Pledge], height: int) -> list[PledgeStatus]:
    """
    Summarize the pledges with a payment due at ``height``, sorted by
    next_due_block ascending (most overdue first).
    """
    return sorted(
        (
            build_status(pledge, height)
            for pledge in pledges
            if is_payment_due(pledge, height)
        ),
        key=lambda status: (status.next_due_block, status.pledge_id),
    )


def build_indexes(
    pledges: list[Pledge],
) -> tuple[dict[str, list[int]], dict[str, list[int]]]:
    """
    Rebuild the patron and creator indexes from the primary pledge store.

    Ids are appended in ascending order, which is creation order.
    """
    by_patron: dict[str, list[int]] = {}
    by_creator: dict[str, list[int]] = {}
    for pledge in sorted(pledges, key=lambda item: item.id):
        by_patron.setdefault(pledge.patron, []).append(pledge.id)
        by_creator.setdefault(pledge.creator, []).append(pledge.id)
    return by_patron, by_creator


def indexes_consistent(storage: PledgeStorage) -> bool:
    """True when the stored indexes match those rebuilt from the pledges."""
    by_patron, by_creator = build_indexes(storage.list_pledges())
    return storage.patron_index() == by_patron and storage.creator_index() == by_creator
