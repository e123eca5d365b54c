"""Selection of stored profiles by model parameter.

A selector is either :class:`ExactMatch` (a single grid value) or
:class:`Range` (a closed interval).  :func:`select` evaluates one selector
against a header column and :func:`build_mask` combines several into a
column mask over the table.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import NamedTuple, Union

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from firijax.table._types import FIRITable

logger = logging.getLogger(__name__)


class ExactMatch(NamedTuple):
    """Select the profiles whose parameter equals ``value``."""

    value: float


class Range(NamedTuple):
    """Select the profiles whose parameter lies in ``[lo, hi]`` (inclusive).

    An inverted interval (``lo > hi``) selects nothing.
    """

    lo: float
    hi: float


Selector = Union[ExactMatch, Range]


def as_selector(spec) -> Selector:
    """Convert a scalar or a ``(lo, hi)`` pair into a selector.

    Args:
        spec: An :class:`ExactMatch`, a :class:`Range`, a real scalar, or a
            two-element tuple/list.

    Returns:
        The corresponding selector.

    Raises:
        ValueError: If *spec* is none of the accepted forms.

    Examples:
        >>> as_selector(30)
        ExactMatch(value=30)
        >>> as_selector((0, 90))
        Range(lo=0, hi=90)
    """
    if isinstance(spec, (ExactMatch, Range)):
        return spec
    if isinstance(spec, (tuple, list)):
        if len(spec) != 2:
            raise ValueError(f"A range selector needs exactly 2 bounds, got {spec!r}")
        return Range(spec[0], spec[1])
    if isinstance(spec, Real):
        return ExactMatch(spec)
    raise ValueError(f"Cannot interpret {spec!r} as a selector; use a number or a (lo, hi) pair")


def select(column: ArrayLike, spec: Selector, axis: str = "value") -> Array | None:
    """Evaluate *spec* against a header column.

    Args:
        column: Header column values, shape ``(P,)``.
        spec: Selector to evaluate.
        axis: Parameter name, used in the warning message.

    Returns:
        Boolean mask of shape ``(P,)``, or ``None`` when *spec* is an
        :class:`ExactMatch` whose value is not in *column*.  A warning is
        logged in that case.
    """
    column = jnp.asarray(column)
    if isinstance(spec, Range):
        return (spec.lo <= column) & (column <= spec.hi)

    mask = column == spec.value
    if not bool(jnp.any(mask)):
        logger.warning(
            "%s is not in model parameters (%s). Looking for interpolating form "
            "`interpolate_profiles`?",
            spec.value,
            axis,
        )
        return None
    return mask


def build_mask(table: FIRITable, **selectors) -> Array:
    """AND together the masks of several selectors.

    Selectors whose value is ``None`` are skipped.  An exact value that is
    absent from the grid selects nothing (and logs a warning).

    Args:
        table: Model table.
        **selectors: Parameter name to selector (or anything
            :func:`as_selector` accepts), e.g. ``chi=(0, 90), month=6``.

    Returns:
        Boolean column mask of shape ``(P,)``.
    """
    mask = jnp.ones(table.n_profiles, dtype=bool)
    for axis, spec in selectors.items():
        if spec is None:
            continue
        m = select(table.column(axis), as_selector(spec), axis=axis)
        if m is None:
            m = jnp.zeros(table.n_profiles, dtype=bool)
        mask = mask & m
    return mask
