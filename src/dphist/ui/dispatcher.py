"""Map key presses onto session actions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from dphist.core.utils.logging import get_logger
from dphist.session.state import Action

KEY_BINDINGS: Mapping[str, Action] = MappingProxyType(
    {
        "n": Action.SWITCH_MECHANISM,
        "i": Action.INCREASE_NOISE,
        "d": Action.DECREASE_NOISE,
        "s": Action.SWITCH_FIELD,
        "q": Action.QUIT,
    }
)

logger = get_logger(__name__)


def dispatch(key: str, bindings: Mapping[str, Action] = KEY_BINDINGS) -> Optional[Action]:
    """Return the action bound to `key`, or None for unbound keys."""
    normalized = key.strip().lower()[:1]
    action = bindings.get(normalized)
    if action is None:
        logger.debug("ignoring unbound key %r", key)
    return action
