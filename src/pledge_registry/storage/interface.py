# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from abc import ABC, abstractmethod

from pledge_registry.types import Pledge, PledgeUpdate, TransferInstruction


class PledgeStorage(ABC):
    """
    Minimal persistence contract for the pledge registry.

    Implementors may back this with any key-value store. Index maps are
    append-only: there is no operation to remove an id from them. The default
    MemoryStorage is suitable for single-process use and testing only.
    """

    # ─── Pledges ──────────────────────────────────────────────────────────────

    @abstractmethod
    def get_pledge(self, pledge_id: int) -> Pledge | None:
        ...

    @abstractmethod
    def save_pledge(self, pledge: Pledge) -> None:
        ...

    @abstractmethod
    def list_pledges(self) -> list[Pledge]:
        ...

    # ─── Updates ──────────────────────────────────────────────────────────────

    @abstractmethod
    def get_update(self, pledge_id: int) -> PledgeUpdate | None:
        ...

    @abstractmethod
    def save_update(self, update: PledgeUpdate) -> None:
        ...

    # ─── Indexes ──────────────────────────────────────────────────────────────

    @abstractmethod
    def append_patron_index(self, patron: str, pledge_id: int) -> None:
        ...

    @abstractmethod
    def append_creator_index(self, creator: str, pledge_id: int) -> None:
        ...

    @abstractmethod
    def list_by_patron(self, patron: str) -> list[int]:
        ...

    @abstractmethod
    def list_by_creator(self, creator: str) -> list[int]:
        ...

    @abstractmethod
    def patron_index(self) -> dict[str, list[int]]:
        ...

    @abstractmethod
    def creator_index(self) -> dict[str, list[int]]:
        ...

    # ─── Transfers ────────────────────────────────────────────────────────────

    @abstractmethod
    def save_transfer(self, transfer: TransferInstruction) -> None:
        ...

    @abstractmethod
    def list_transfers(self) -> list[TransferInstruction]:
        ...
