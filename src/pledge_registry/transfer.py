# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from pledge_registry.types import Pledge, TransferFilter, TransferInstruction


def build_transfer(
    index: int,
    pledge: Pledge,
    escrow_reference: str,
    height: int,
) -> TransferInstruction:
    """
    Build the transfer instruction for one payment of ``pledge``.

    Funds flow from the escrow holder to the pledge's creator.
    """
    return TransferInstruction(
        index=index,
        pledge_id=pledge.id,
        amount=pledge.amount,
        currency=pledge.currency,
        source=escrow_reference,
        destination=pledge.creator,
        height=height,
    )


def filter_transfers(
    transfers: list[TransferInstruction],
    transfer_filter: TransferFilter | None,
) -> list[TransferInstruction]:
    """
    Apply an optional TransferFilter to a list of transfer instructions.
    All filter fields are AND-ed together.
    Returns a new list — the input is not modified.
    """
    if transfer_filter is None:
        return list(transfers)

    results: list[TransferInstruction] = []
    for transfer in transfers:
        if (
            transfer_filter.pledge_id is not None
            and transfer.pledge_id != transfer_filter.pledge_id
        ):
            continue

        if (
            transfer_filter.source is not None
            and transfer.source != transfer_filter.source
        ):
            continue

        if (
            transfer_filter.destination is not None
            and transfer.destination != transfer_filter.destination
        ):
            continue

        if (
            transfer_filter.since_height is not None
            and transfer.height < transfer_filter.since_height
        ):
            continue

        if (
            transfer_filter.until_height is not None
            and transfer.height > transfer_filter.until_height
        ):
            continue

        results.append(transfer)

    return results
