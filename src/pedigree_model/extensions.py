"""Ordered observer hooks fired at person lifecycle points.

Callbacks run synchronously in registration order. Each receives the payload
mapping and may return a replacement payload; returning None keeps the payload
as it is. The final payload is handed back to the caller.
"""
from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

Payload = dict[str, Any]
ExtensionCallback = Callable[[Payload], "Payload | None"]


class ExtensionPoint(str, Enum):
    """Lifecycle points at which extensions are called."""

    PERSON_CREATED = "personNodeCreated"
    PERSON_REMOVED = "personNodeRemoved"
    PERSON_TO_MODEL = "personToModel"
    MODEL_TO_PERSON = "modelToPerson"
    PERSON_MENU_DATA = "personGetNodeMenuData"


class ExtensionManager:
    """Registry of callbacks per extension point."""

    def __init__(self) -> None:
        self._callbacks: dict[ExtensionPoint, list[ExtensionCallback]] = {}

    def register(self, point: ExtensionPoint | str, callback: ExtensionCallback) -> None:
        point = ExtensionPoint(point)
        self._callbacks.setdefault(point, []).append(callback)
        logger.debug("extensions.registered", point=point.value)

    def unregister(self, point: ExtensionPoint | str, callback: ExtensionCallback) -> bool:
        callbacks = self._callbacks.get(ExtensionPoint(point), [])
        if callback in callbacks:
            callbacks.remove(callback)
            return True
        return False

    def callbacks(self, point: ExtensionPoint | str) -> list[ExtensionCallback]:
        return list(self._callbacks.get(ExtensionPoint(point), []))

    def call(self, point: ExtensionPoint | str, payload: Payload) -> Payload:
        """Run every callback of ``point`` over ``payload`` and return the result."""
        for callback in self.callbacks(point):
            result = callback(payload)
            if result is not None:
                payload = result
        return payload
