# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from spend_sense.persistence import dumps_state, loads_state
from spend_sense.storage.interface import StateStorage
from spend_sense.types import AppState


class MemoryStorage(StateStorage):
    """
    In-process store holding the serialised JSON text.

    Keeping text rather than the live object means every load goes through
    the same codec as a real backend, and later mutations of the engine's
    state never leak into the saved copy.
    """

    def __init__(self, text: str | None = None) -> None:
        self._text = text

    @property
    def text(self) -> str | None:
        return self._text

    def load(self) -> AppState | None:
        if self._text is None:
            return None
        return loads_state(self._text)

    def save(self, state: AppState) -> None:
        self._text = dumps_state(state)
