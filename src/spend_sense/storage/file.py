# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Single-document JSON file storage backend.

The whole state is rewritten on every save. Writes go to a sibling temporary
file that is then renamed over the target, so a crash mid-write leaves the
previous snapshot intact.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from spend_sense.errors import PersistenceCorruptError
from spend_sense.persistence import dumps_state, loads_state
from spend_sense.storage.interface import StateStorage
from spend_sense.types import AppState

logger = logging.getLogger("spend_sense.storage")


class JsonFileStorage(StateStorage):
    """
    Persistent JSON file storage backend.

    Parameters
    ----------
    file_path:
        Path to the JSON file. Parent directories are created on first save.
    """

    def __init__(self, file_path: str | Path) -> None:
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> AppState | None:
        """
        Read the saved state, or return ``None`` when no file exists yet.

        Raises:
            PersistenceCorruptError: If the file is readable but its content
                is not a valid snapshot.
            OSError: If the file cannot be read at all (it is a directory,
                or permission is denied). This is an environment problem, not
                corrupt data, so it is left to the caller; treating it as
                corrupt would let the next save replace a file that may be
                perfectly valid.
        """
        if not self._file_path.exists():
            return None
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise PersistenceCorruptError(f"not UTF-8 text ({exc.reason})") from None
        return loads_state(text)

    def save(self, state: AppState) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        temp_path.write_text(dumps_state(state), encoding="utf-8")
        os.replace(temp_path, self._file_path)
        logger.debug(
            "state_saved",
            extra={"path": str(self._file_path), "expense_count": len(state.expenses)},
        )
