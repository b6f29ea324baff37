# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from abc import ABC, abstractmethod

from spend_sense.types import AppState


class StateStorage(ABC):
    """
    Minimal persistence contract for the engine.

    Implementors may back this with browser local storage, a file, or any
    key-value store. The default MemoryStorage is suitable for single-process
    use and testing only — state is lost when the process exits.
    """

    @abstractmethod
    def load(self) -> AppState | None:
        """
        Return the saved state, or None when nothing has been saved yet.

        Raises PersistenceCorruptError when a snapshot exists but cannot be
        parsed. Failures to reach the backing store itself (OSError) are not
        corruption and propagate unchanged.
        """
        ...

    @abstractmethod
    def save(self, state: AppState) -> None:
        ...
