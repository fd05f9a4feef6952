r"""Unit tests for predicate-gated consumers."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretry.conditional import ConditionalConsumer, accept_if


def test_accept_if_predicate_true() -> None:
    """Test that the consumer runs when the predicate holds."""
    consumer = Mock()
    accept_if(consumer, lambda value: value > 0)(5)
    consumer.assert_called_once_with(5)


def test_accept_if_predicate_false() -> None:
    """Test that the consumer does not run when the predicate fails."""
    consumer = Mock()
    accept_if(consumer, lambda value: value > 0)(-5)
    consumer.assert_not_called()


def test_accept_if_predicate_none() -> None:
    """Test that a None predicate is rejected."""
    with pytest.raises(ValueError, match=r"predicate is None"):
        accept_if(Mock(), None)  # type: ignore[arg-type]


def test_accept_if_evaluates_predicate_per_value() -> None:
    """Test that the predicate is evaluated for every value."""
    seen = []
    predicate = Mock(side_effect=[True, False, True])
    consumer = accept_if(seen.append, predicate)
    for value in ("a", "b", "c"):
        consumer(value)
    assert seen == ["a", "c"]
    assert predicate.call_count == 3


def test_conditional_consumer_call() -> None:
    """Test that the builder forwards values without condition."""
    consumer = Mock()
    ConditionalConsumer(consumer)("cat")
    consumer.assert_called_once_with("cat")


def test_conditional_consumer_accept_if() -> None:
    """Test the builder form of accept_if."""
    seen = []
    gated = ConditionalConsumer(seen.append).accept_if(lambda value: len(value) > 2)
    gated("ab")
    gated("abc")
    assert seen == ["abc"]


def test_conditional_consumer_accept_if_none() -> None:
    """Test that the builder rejects a None predicate."""
    with pytest.raises(ValueError, match=r"predicate is None"):
        ConditionalConsumer(Mock()).accept_if(None)  # type: ignore[arg-type]
