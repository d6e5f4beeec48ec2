# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from pledge_registry.storage.interface import PledgeStorage
from pledge_registry.storage.memory import MemoryStorage

__all__ = ["PledgeStorage", "MemoryStorage"]
