"""Cyclic cursor over the registry's instance names."""

from typing import Optional

from instance_handling.registry import DEFAULT_INSTANCE_NAME, Registry
from utils.monitoring import get_logger

logger = get_logger(__name__)


def initial_selection(registry: Registry, preferred: Optional[str] = DEFAULT_INSTANCE_NAME) -> str:
    """Key the selector starts on: the preferred name if present, else the first."""
    if preferred is not None and preferred in registry:
        return preferred
    return registry.names()[0]


class Selector:
    """
    Tracks the highlighted instance.

    The selected key may briefly name an instance that was just removed. Reads
    through `current_key` resolve that to the first name in lexical order, and
    the next navigation call lands on the first name instead of stepping.
    """

    def __init__(self, registry: Registry, current_key: Optional[str] = None):
        self._registry = registry
        self._current_key = current_key if current_key is not None else initial_selection(registry)

    @property
    def current_key(self) -> str:
        if self._current_key not in self._registry:
            self._normalize()
        return self._current_key

    def select(self, key: str) -> None:
        """Jump straight to a key, e.g. to restore a selection after a failed removal."""
        self._current_key = key

    def next(self) -> str:
        """Move to the following name, wrapping from last to first."""
        return self._step(1)

    def previous(self) -> str:
        """Move to the preceding name, wrapping from first to last."""
        return self._step(-1)

    def _step(self, offset: int) -> str:
        keys = self._registry.names()
        if self._current_key not in keys:
            self._normalize()
        else:
            index = keys.index(self._current_key)
            self._current_key = keys[(index + offset) % len(keys)]
        logger.debug(f"Selected instance '{self._current_key}'")
        return self._current_key

    def _normalize(self) -> None:
        self._current_key = self._registry.names()[0]
