"""Unit tests for the identifier generator."""

from __future__ import annotations

from store.id_generator import IdentifierGenerator


def test_next_returns_current_then_advances() -> None:
    """next should hand out the current value and move past it."""
    generator = IdentifierGenerator(5)

    values = (generator.next(), generator.next())

    assert values == (5, 6) and generator.current() == 7


def test_observe_only_moves_forward() -> None:
    """observe should never lower the counter."""
    generator = IdentifierGenerator(10)
    generator.observe(3)
    after_low = generator.current()
    generator.observe(12)

    assert after_low == 10 and generator.current() == 13


def test_start_below_one_is_clamped() -> None:
    """Generated ids start at one even when seeded lower."""
    assert IdentifierGenerator(0).next() == 1


def test_copy_is_independent() -> None:
    """Advancing a copy must not affect the original."""
    generator = IdentifierGenerator(2)
    clone = generator.copy()
    clone.next()

    assert generator.current() == 2 and clone.current() == 3
