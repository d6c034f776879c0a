"""Rank movement classification and display colors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import DOWN, GREEN, ORANGE, RED, SAME, UP, Collection, RankedCollection

# Rank assumed for a collection missing from the reference state: one past the top 100
ABSENT_RANK = 101

MAX_RANK = 100


def compute_movement(current_rank: int, reference_rank: int | None = None) -> str:
    """'up', 'down', or 'same' relative to the reference rank.

    A lower rank number is better, so moving from 5 to 3 is 'up'.
    """
    if reference_rank is None:
        reference_rank = ABSENT_RANK
    if current_rank < reference_rank:
        return UP
    if current_rank > reference_rank:
        return DOWN
    return SAME


def resolve_color(movement: str, previous_color: str | None = None) -> str:
    """Sticky color: keeps the last trend color through 'same' cycles."""
    if movement == UP:
        return GREEN
    if movement == DOWN:
        return RED
    return previous_color or RED


def movement_color(movement: str) -> str:
    """Plain color for a movement, with orange for 'same'."""
    if movement == UP:
        return GREEN
    if movement == DOWN:
        return RED
    return ORANGE


def rank_collections(
    collections: Iterable[Collection],
    reference: Mapping[str, int] | None,
    previous_colors: Mapping[str, str] | None = None,
    limit: int = MAX_RANK,
) -> list[RankedCollection]:
    """Assign ranks by position and classify each collection's movement.

    reference=None means there is no reference point at all, so every
    collection is 'same'. Otherwise ids missing from the reference count as
    ABSENT_RANK. Passing previous_colors switches on sticky colors.
    """
    ranked: list[RankedCollection] = []
    for index, collection in enumerate(collections):
        if index >= limit:
            break
        rank = index + 1

        if reference is None:
            previous_rank = None
            movement = SAME
        else:
            previous_rank = reference.get(collection.id)
            movement = compute_movement(rank, previous_rank)

        if previous_colors is not None:
            color = resolve_color(movement, previous_colors.get(collection.id))
        else:
            color = movement_color(movement)

        ranked.append(
            RankedCollection(
                rank=rank,
                collection=collection,
                movement=movement,
                color=color,
                previous_rank=previous_rank,
            )
        )
    return ranked
