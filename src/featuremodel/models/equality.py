"""Equality Engine - structural comparison over capability interfaces.

Two nodes are equal when they share at least one capability interface
and every shared interface's rule holds. Concrete node kind plays no
part, so a Background and a Scenario with the same steps are equal.
Parents, source locations and raw parser data are never compared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

from featuremodel.models.capabilities import (
    Containing,
    Described,
    Named,
    Stepped,
    TableHolder,
    Tagged,
    Textual,
)

if TYPE_CHECKING:
    from featuremodel.models.base import Model


def sequences_equal(left: Sequence[Model], right: Sequence[Model]) -> bool:
    """Element-wise node equality, order-sensitive."""
    return len(left) == len(right) and all(models_equal(a, b) for a, b in zip(left, right))


def _names_equal(left: Named, right: Named) -> bool:
    return left.name == right.name


def _descriptions_equal(left: Described, right: Described) -> bool:
    return left.description == right.description


def _tags_equal(left: Tagged, right: Tagged) -> bool:
    return left.tag_names == right.tag_names


def _steps_equal(left: Stepped, right: Stepped) -> bool:
    return sequences_equal(left.steps, right.steps)


def _children_equal(left: Model, right: Model) -> bool:
    return sequences_equal(left.children(), right.children())


def _rows_equal(left: TableHolder, right: TableHolder) -> bool:
    return sequences_equal(left.rows, right.rows)


def _texts_equal(left: Textual, right: Textual) -> bool:
    return left.text_value == right.text_value


# Comparison rule for each capability interface, in evaluation order.
CAPABILITY_RULES: dict[type, Callable[[object, object], bool]] = {
    Named: _names_equal,  # type: ignore[dict-item]
    Textual: _texts_equal,  # type: ignore[dict-item]
    Described: _descriptions_equal,  # type: ignore[dict-item]
    Tagged: _tags_equal,  # type: ignore[dict-item]
    Stepped: _steps_equal,  # type: ignore[dict-item]
    TableHolder: _rows_equal,  # type: ignore[dict-item]
    Containing: _children_equal,  # type: ignore[dict-item]
}


def capabilities_of(model: object) -> frozenset[type]:
    """Return the capability interfaces ``model`` implements."""
    return frozenset(capability for capability in CAPABILITY_RULES if isinstance(model, capability))


def shared_capabilities(left: object, right: object) -> list[type]:
    """Capabilities implemented by both nodes, in evaluation order."""
    shared = capabilities_of(left) & capabilities_of(right)
    return [capability for capability in CAPABILITY_RULES if capability in shared]


def models_equal(left: Model, right: Model) -> bool:
    """Compare two nodes by the capabilities they have in common."""
    if left is right:
        return True
    shared = shared_capabilities(left, right)
    if not shared:
        return False
    return all(CAPABILITY_RULES[capability](left, right) for capability in shared)
