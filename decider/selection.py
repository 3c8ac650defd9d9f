"""Random selection over parsed lists.

Every pick is an independent uniform draw over the whole list, so picking
again can return the same item.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from decider.errors import EmptyInputError, InsufficientItemsError, SelectionOnEmptyError
from decider.history import Decision
from decider.parse import ParsedList, parse_list

logger = logging.getLogger(__name__)

MIN_ITEMS_FOR_DECISION = 2

# (frame count, seconds per frame): fast, slower, slowest
DEFAULT_SPIN_SCHEDULE: tuple[tuple[int, float], ...] = ((20, 0.05), (8, 0.1), (4, 0.2))

_system_random = random.SystemRandom()


@dataclass(frozen=True)
class SpinFrame:
    """One step of the reveal animation."""

    item: str
    delay: float
    final: bool = False


def _items_of(source: ParsedList | Sequence[str]) -> Sequence[str]:
    return source.items if isinstance(source, ParsedList) else source


def check_decidable(
    source: ParsedList | Sequence[str], min_items: int = MIN_ITEMS_FOR_DECISION
) -> Sequence[str]:
    """Validate that a list is large enough to decide between.

    Args:
        source: Parsed list or plain sequence of items.
        min_items: Smallest number of items a decision is offered for.

    Returns:
        The items, unchanged.

    Raises:
        EmptyInputError: No items were found.
        InsufficientItemsError: Fewer than ``min_items`` items.
    """
    items = _items_of(source)
    if not items:
        raise EmptyInputError()
    if len(items) < min_items:
        raise InsufficientItemsError(count=len(items), minimum=min_items)
    return items


def pick(items: Sequence[str], rng: random.Random | None = None) -> str:
    """Pick one item uniformly at random.

    Raises:
        SelectionOnEmptyError: ``items`` is empty. Callers are expected to
            gate on ``check_decidable`` first.
    """
    if not items:
        raise SelectionOnEmptyError()
    chosen = (rng or _system_random).choice(items)
    logger.debug("Picked %r from %d items", chosen, len(items))
    return chosen


def spin_frames(
    items: Sequence[str],
    rng: random.Random | None = None,
    schedule: Sequence[tuple[int, float]] = DEFAULT_SPIN_SCHEDULE,
) -> Iterator[SpinFrame]:
    """Yield the frames of a slowing slot-machine reveal.

    Each intermediate frame shows a random item; the last frame carries the
    actual pick, drawn independently of what was shown while spinning.
    """
    if not items:
        raise SelectionOnEmptyError()
    generator = rng or _system_random
    for count, delay in schedule:
        for _ in range(count):
            yield SpinFrame(item=generator.choice(items), delay=delay)
    yield SpinFrame(item=pick(items, generator), delay=0.0, final=True)


def decide(
    source: str | ParsedList,
    rng: random.Random | None = None,
    min_items: int = MIN_ITEMS_FOR_DECISION,
) -> Decision:
    """Parse (if needed), validate and pick, returning a new decision record."""
    parsed = parse_list(source) if isinstance(source, str) else source
    items = check_decidable(parsed, min_items=min_items)
    return Decision.create(
        selected_item=pick(items, rng),
        total_items=len(items),
        title=parsed.title,
    )
