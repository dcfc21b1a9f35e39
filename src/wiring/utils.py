"""Shared utility functions."""

from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def comma_sep_str(items: Iterable[T]) -> str:
    """Join items with commas and str."""
    return ", ".join(map(str, items))


def comma_sep_repr(items: Iterable[T]) -> str:
    """Join items with commas and repr."""
    return ", ".join(map(repr, items))
