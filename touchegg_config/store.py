"""
Gesture configuration store.

The loader only ever writes to a store: it clears it and registers gesture
bindings. GestureConfigStore is the interface it relies on;
InMemoryGestureStore is the thread-safe implementation used by the daemon.
"""

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager, nullcontext
from typing import ContextManager, Dict, Iterator, List, Optional, Tuple

from .models import GestureActionConfig

logger = logging.getLogger(__name__)

GestureKey = Tuple[str, str, str, str]


class GestureConfigStore(ABC):
    """Receives the gesture bindings parsed from the configuration file."""

    @abstractmethod
    def save_gesture_config(
        self,
        application: str,
        gesture_type: str,
        fingers: str,
        direction: str,
        action_type: str,
        action_settings: Dict[str, str]
    ) -> None:
        """Register the action bound to a gesture for one application."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every registered gesture."""

    def transaction(self) -> ContextManager:
        """
        Group a clear-and-repopulate sequence.

        The default is a no-op; stores that can swap their contents atomically
        override it so readers never see a partially loaded configuration.
        """
        return nullcontext()


class InMemoryGestureStore(GestureConfigStore):
    """
    Dictionary-backed store keyed by (application, gesture type, fingers, direction).

    All access goes through an RLock. Inside transaction() writes land in a
    staging dictionary that replaces the live one when the block exits
    cleanly and is dropped if it raises.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._configs: Dict[GestureKey, GestureActionConfig] = {}
        self._staging: Optional[Dict[GestureKey, GestureActionConfig]] = None

    def _target(self) -> Dict[GestureKey, GestureActionConfig]:
        return self._staging if self._staging is not None else self._configs

    def save_gesture_config(
        self,
        application: str,
        gesture_type: str,
        fingers: str,
        direction: str,
        action_type: str,
        action_settings: Dict[str, str]
    ) -> None:
        key = (application, gesture_type, fingers, direction)
        with self._lock:
            self._target()[key] = GestureActionConfig(
                action_type=action_type,
                action_settings=dict(action_settings)
            )

    def clear(self) -> None:
        with self._lock:
            self._target().clear()

    @contextmanager
    def transaction(self) -> Iterator["InMemoryGestureStore"]:
        with self._lock:
            if self._staging is not None:
                # Nested transaction joins the outer one
                yield self
                return

            self._staging = dict(self._configs)
            try:
                yield self
            except BaseException:
                logger.debug("Store transaction aborted, keeping previous gestures")
                raise
            else:
                self._configs = self._staging
            finally:
                self._staging = None

    def get_gesture_config(
        self,
        application: str,
        gesture_type: str,
        fingers: str,
        direction: str
    ) -> Optional[GestureActionConfig]:
        """
        Return the action registered for an exact gesture key.

        Args:
            application: Application identifier as written in the configuration
            gesture_type: Gesture type tag
            fingers: Number of fingers as written in the configuration
            direction: Direction tag

        Returns:
            GestureActionConfig copy or None if nothing is registered
        """
        with self._lock:
            config = self._configs.get((application, gesture_type, fingers, direction))
            return config.model_copy(deep=True) if config is not None else None

    def applications(self) -> List[str]:
        """Application identifiers with at least one registered gesture."""
        with self._lock:
            return sorted({key[0] for key in self._configs})

    def snapshot(self) -> Dict[GestureKey, GestureActionConfig]:
        with self._lock:
            return {key: config.model_copy(deep=True) for key, config in self._configs.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._configs)

    def __repr__(self):
        return f"<InMemoryGestureStore gestures={len(self)}>"
