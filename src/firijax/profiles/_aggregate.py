"""Mean and quantile profiles over a selection of model profiles."""

from __future__ import annotations

from numbers import Real

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from firijax.constants import DEFAULT_CHI, DEFAULT_F10_7, DEFAULT_LAT, DEFAULT_MONTH, MIN_DENSITY
from firijax.profiles._interpolate import interpolate_profiles, select_profiles
from firijax.table._types import FIRITable


def _is_scalar(x) -> bool:
    """True for Python, NumPy and 0-d JAX numbers; False for selectors."""
    if x is None or isinstance(x, (tuple, list, str)):
        return False
    return isinstance(x, Real) or jnp.ndim(x) == 0


def _profiles(table: FIRITable, chi, lat, f10_7, month, doy) -> Array:
    """Select profiles, interpolating when both *chi* and *lat* are scalars."""
    if _is_scalar(chi) and _is_scalar(lat):
        profiles = interpolate_profiles(
            table, float(chi), float(lat), f10_7=f10_7, month=month, doy=doy
        )
    else:
        profiles = select_profiles(table, chi=chi, lat=lat, f10_7=f10_7, month=month, doy=doy)
    if profiles.shape[1] == 0:
        raise ValueError("No model profiles match the requested parameters")
    return profiles


def _floor(profile: Array) -> Array:
    return jnp.where(profile < MIN_DENSITY, MIN_DENSITY, profile)


def firi(
    table: FIRITable,
    chi=DEFAULT_CHI,
    lat=DEFAULT_LAT,
    *,
    f10_7=DEFAULT_F10_7,
    month=DEFAULT_MONTH,
    doy=None,
) -> Array:
    """Return the average FIRI profile across the selected model parameters.

    When *chi* and *lat* are both numbers the profiles are interpolated at
    that point (see :func:`interpolate_profiles`); otherwise every argument
    is a selector (see :func:`select_profiles`).  Densities below
    :data:`~firijax.constants.MIN_DENSITY` are replaced by it.

    Args:
        table: Model table.
        chi: Solar zenith angle [deg] or selector.
        lat: Latitude [deg] or selector.
        f10_7: F10.7 selector [sfu].
        month: Month selector.
        doy: Day-of-year selector.

    Returns:
        Mean electron density profile [m^-3], shape ``(A,)``.

    Raises:
        ValueError: If no profile matches.

    Examples:
        ```python
        from firijax import firi, load_firi
        table = load_firi()
        ne = firi(table, 45.0, 30.0, month=(6, 8))
        ```
    """
    profiles = _profiles(table, chi, lat, f10_7, month, doy)
    return _floor(jnp.mean(profiles, axis=1))


def quantile(
    table: FIRITable,
    p: float | ArrayLike,
    chi=DEFAULT_CHI,
    lat=DEFAULT_LAT,
    *,
    f10_7=DEFAULT_F10_7,
    month=DEFAULT_MONTH,
    doy=None,
) -> Array:
    """Compute the quantile(s) *p* of the selected profiles at each altitude.

    Selection follows :func:`firi`.  Quantiles use linear interpolation
    between order statistics.

    Args:
        table: Model table.
        p: Quantile in ``[0, 1]``, or a sequence of quantiles.
        chi: Solar zenith angle [deg] or selector.
        lat: Latitude [deg] or selector.
        f10_7: F10.7 selector [sfu].
        month: Month selector.
        doy: Day-of-year selector.

    Returns:
        Shape ``(A,)`` for a scalar *p*, ``(A, len(p))`` otherwise.

    Raises:
        ValueError: If no profile matches or *p* is outside ``[0, 1]``.
    """
    p_arr = jnp.asarray(p, dtype=table.data.dtype)
    if bool(jnp.any((p_arr < 0) | (p_arr > 1))):
        raise ValueError(f"Quantiles must lie in [0, 1], got {p}")

    profiles = _profiles(table, chi, lat, f10_7, month, doy)
    q = jnp.quantile(profiles, p_arr, axis=1)
    if p_arr.ndim > 0:
        q = q.T
    return _floor(q)
