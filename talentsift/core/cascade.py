import logging
from typing import Callable, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")

Tier = Tuple[str, Callable[[S], Optional[T]]]


def run_cascade(tiers: Sequence[Tier], subject: S, field: str) -> Optional[T]:
    """
    Try extraction tiers in order; the first non-empty result wins.

    Tiers are (name, fn) pairs so the debug trace says which strategy fired.
    Returns None when every tier comes up empty; callers substitute their sentinel.
    """
    for name, tier in tiers:
        result = tier(subject)
        if result:
            logger.debug(f"{field}: tier '{name}' matched {result!r}")
            return result
        logger.debug(f"{field}: tier '{name}' found nothing")
    logger.debug(f"{field}: no tier matched")
    return None
