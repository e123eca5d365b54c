"""Bracketing grid values for interpolation and extrapolation."""

from __future__ import annotations

import jax.numpy as jnp
from jax.typing import ArrayLike


def twoclosest(values: ArrayLike, target: float) -> tuple[float, float]:
    """Return the two grid values used to interpolate *values* at *target*.

    Duplicates in *values* are ignored. The result is sorted and is:

    - ``(target, target)`` if *target* is exactly a grid value, meaning no
      interpolation is needed on this axis;
    - the two values closest to *target* if it lies on or beyond the edge
      of the grid (extrapolating);
    - otherwise the closest value on each side of *target* (interpolating).

    Args:
        values: Grid values of one axis, e.g. a header column.
        target: Value to bracket.

    Returns:
        Sorted ``(low, high)`` pair of grid values.

    Raises:
        ValueError: If *values* holds fewer than two distinct values and
            *target* is not one of them.

    Examples:
        >>> chi = [0, 30, 45, 60, 75, 80, 85, 90, 95, 100, 130]
        >>> twoclosest(chi, 89)
        (85.0, 90.0)
        >>> twoclosest(chi, 135)
        (100.0, 130.0)
    """
    uvals = jnp.unique(jnp.asarray(values))

    hit = uvals == target
    if bool(jnp.any(hit)):
        value = float(uvals[jnp.argmax(hit)])
        return value, value

    if uvals.shape[0] < 2:
        raise ValueError(f"At least two distinct grid values are needed to bracket {target}")

    if target >= float(uvals[-1]) or target <= float(uvals[0]):
        # Extrapolating: nothing beyond the edge, so use the 2 nearest points
        order = jnp.argsort(jnp.abs(uvals - target), stable=True)
        low, high = sorted((float(uvals[order[0]]), float(uvals[order[1]])))
        return low, high

    below = float(jnp.max(jnp.where(uvals < target, uvals, -jnp.inf)))
    above = float(jnp.min(jnp.where(uvals > target, uvals, jnp.inf)))
    return below, above
