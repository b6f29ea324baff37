# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from spend_sense.storage.file import JsonFileStorage
from spend_sense.storage.interface import StateStorage
from spend_sense.storage.memory import MemoryStorage

__all__ = ["StateStorage", "MemoryStorage", "JsonFileStorage"]
