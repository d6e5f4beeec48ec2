# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from pledge_registry.storage.interface import PledgeStorage
from pledge_registry.types import Pledge, PledgeUpdate, TransferInstruction


class MemoryStorage(PledgeStorage):
    """
    In-process memory store — suitable for single-process hosts and testing.

    Reads return copies, so callers cannot mutate stored state. All state is
    lost when the process exits.
    """

    def __init__(self) -> None:
        self._pledges: dict[int, Pledge] = {}
        self._updates: dict[int, PledgeUpdate] = {}
        self._by_patron: dict[str, list[int]] = {}
        self._by_creator: dict[str, list[int]] = {}
        self._transfers: list[TransferInstruction] = []

    # ─── Pledges ──────────────────────────────────────────────────────────────

    def get_pledge(self, pledge_id: int) -> Pledge | None:
        pledge = self._pledges.get(pledge_id)
        return pledge.model_copy(deep=True) if pledge is not None else None

    def save_pledge(self, pledge: Pledge) -> None:
        self._pledges[pledge.id] = pledge.model_copy(deep=True)

    def list_pledges(self) -> list[Pledge]:
        return [
            self._pledges[pledge_id].model_copy(deep=True)
            for pledge_id in sorted(self._pledges)
        ]

    # ─── Updates ──────────────────────────────────────────────────────────────

    def get_update(self, pledge_id: int) -> PledgeUpdate | None:
        return self._updates.get(pledge_id)

    def save_update(self, update: PledgeUpdate) -> None:
        self._updates[update.pledge_id] = update

    # ─── Indexes ──────────────────────────────────────────────────────────────

    def append_patron_index(self, patron: str, pledge_id: int) -> None:
        self._by_patron.setdefault(patron, []).append(pledge_id)

    def append_creator_index(self, creator: str, pledge_id: int) -> None:
        self._by_creator.setdefault(creator, []).append(pledge_id)

    def list_by_patron(self, patron: str) -> list[int]:
        return list(self._by_patron.get(patron, []))

    def list_by_creator(self, creator: str) -> list[int]:
        return list(self._by_creator.get(creator, []))

    def patron_index(self) -> dict[str, list[int]]:
        return {patron: list(ids) for patron, ids in self._by_patron.items()}

    def creator_index(self) -> dict[str, list[int]]:
        return {creator: list(ids) for creator, ids in self._by_creator.items()}

    # ─── Transfers ────────────────────────────────────────────────────────────

    def save_transfer(self, transfer: TransferInstruction) -> None:
        self._transfers.append(transfer)

    def list_transfers(self) -> list[TransferInstruction]:
        return list(self._transfers)
