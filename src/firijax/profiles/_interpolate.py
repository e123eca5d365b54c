"""Profile selection and interpolation over the (chi, lat) plane.

:func:`select_profiles` returns stored profiles as they are.
:func:`interpolate_profiles` evaluates the model at an arbitrary solar
zenith angle and latitude: stored profiles at the bracketing grid values
(see :func:`twoclosest`) are combined linearly in chi, in latitude, or
bilinearly in both, altitude by altitude.  Outside the grid the same
linear interpolants are extended, so the result is a linear extrapolation.

Profiles are matched to interpolation corners by their explicit
``(f10_7, month, doy)`` parameters, not by their position in the table.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
import numpy as np
from jax import Array

from firijax.constants import DEFAULT_CHI, DEFAULT_F10_7, DEFAULT_LAT, DEFAULT_MONTH, MAX_CHI
from firijax.profiles._neighbors import twoclosest
from firijax.profiles._select import build_mask
from firijax.table._types import FIRITable, ModelTableError

logger = logging.getLogger(__name__)

_chi_clamp_warned = False
"""Whether the warning about clamping `chi` to MAX_CHI has been logged."""


def select_profiles(
    table: FIRITable,
    *,
    chi=DEFAULT_CHI,
    lat=DEFAULT_LAT,
    f10_7=DEFAULT_F10_7,
    month=DEFAULT_MONTH,
    doy=None,
) -> Array:
    """Return the stored profiles matching every selector.

    Each parameter accepts a ``(lo, hi)`` range, a single grid value, or a
    selector (see :func:`as_selector`).  ``None`` leaves a parameter
    unconstrained.

    Args:
        table: Model table.
        chi: Solar zenith angle selector [deg].
        lat: Latitude selector [deg].
        f10_7: F10.7 selector [sfu].
        month: Month selector.
        doy: Day-of-year selector; only for tables that carry it.

    Returns:
        Matrix of shape ``(A, K)`` with the ``K`` selected profiles in table
        order.

    Examples:
        ```python
        from firijax.profiles import select_profiles
        summer = select_profiles(table, month=(6, 8), f10_7=130)
        ```
    """
    mask = build_mask(table, chi=chi, lat=lat, f10_7=f10_7, month=month, doy=doy)
    return table.data[:, jnp.flatnonzero(mask)]


def _check_grid_order(table: FIRITable, axis: str) -> None:
    """Require the distinct values of *axis* to first appear in ascending order.

    Raises:
        ModelTableError: If they do not.
    """
    col = np.asarray(table.column(axis))
    _, first = np.unique(col, return_index=True)
    ordered = col[np.sort(first)]
    if np.any(np.diff(ordered) <= 0):
        raise ModelTableError(f"{axis} column of the table header is not sorted")


def _lerp(lo: Array, hi: Array, x0: float, x1: float, x: float) -> Array:
    """Evaluate the line through ``(x0, lo)`` and ``(x1, hi)`` at *x*."""
    t = (x - x0) / (x1 - x0)
    return lo + t * (hi - lo)


def _group_corners(
    table: FIRITable,
    idxs: np.ndarray,
    corners: list[tuple[float, float]],
) -> np.ndarray:
    """Index the masked profiles by their interpolation corner.

    Profiles sharing ``(f10_7, month, doy)`` form one group, which must hold
    a profile for every ``(chi, lat)`` corner.

    Args:
        table: Model table.
        idxs: Column indices left after masking.
        corners: ``(chi, lat)`` pairs every group must provide.

    Returns:
        Integer array of shape ``(len(corners), G)``: column of each corner
        for each group, groups in order of first appearance.

    Raises:
        ModelTableError: If a group repeats or misses a corner.
    """
    header = table.header
    chi = np.asarray(header.chi)
    lat = np.asarray(header.lat)
    f10_7 = np.asarray(header.f10_7)
    month = np.asarray(header.month)
    doy = None if header.doy is None else np.asarray(header.doy)

    groups: dict[tuple, dict[tuple[float, float], int]] = {}
    for i in idxs:
        key = (float(f10_7[i]), int(month[i]), None if doy is None else int(doy[i]))
        corner = (float(chi[i]), float(lat[i]))
        group = groups.setdefault(key, {})
        if corner in group:
            raise ModelTableError(
                f"Duplicate profile for chi={corner[0]}, lat={corner[1]}, "
                f"f10_7={key[0]}, month={key[1]}"
            )
        group[corner] = int(i)

    cols = np.empty((len(corners), len(groups)), dtype=np.int64)
    for j, (key, group) in enumerate(groups.items()):
        for k, corner in enumerate(corners):
            if corner not in group:
                raise ModelTableError(
                    f"No profile for chi={corner[0]}, lat={corner[1]}, "
                    f"f10_7={key[0]}, month={key[1]}"
                )
            cols[k, j] = group[corner]
    return cols


def interpolate_profiles(
    table: FIRITable,
    chi: float,
    lat: float,
    *,
    f10_7=DEFAULT_F10_7,
    month=DEFAULT_MONTH,
    doy=None,
) -> Array:
    """Return model profiles interpolated at solar zenith angle *chi* and latitude *lat*.

    Profiles are selected by *f10_7*, *month* and *doy* as in
    :func:`select_profiles`, and one profile is produced for every selected
    combination of those parameters.  No extrapolation is performed for
    *chi* greater than 130 deg: it is replaced by ``chi = 130``, and a warning
    is logged the first time this happens.

    Args:
        table: Model table.
        chi: Solar zenith angle [deg], ``>= 0``.
        lat: Latitude [deg], ``>= 0``.  Southern-hemisphere conditions are
            represented by the northern latitude six months later.
        f10_7: F10.7 selector [sfu].
        month: Month selector.
        doy: Day-of-year selector; only for tables that carry it.

    Returns:
        Matrix of shape ``(A, G)``, one column per ``(f10_7, month, doy)``
        combination.

    Raises:
        ValueError: If *chi* or *lat* is negative.
        ModelTableError: If the chi or lat grid of *table* is not sorted, or
            a grid corner is missing.

    Examples:
        ```python
        from firijax.profiles import interpolate_profiles
        profiles = interpolate_profiles(table, 89.0, 31.0, month=6)
        ```
    """
    _check_grid_order(table, "chi")
    _check_grid_order(table, "lat")

    if not (chi >= 0 and lat >= 0):
        raise ValueError(
            "`chi` or `lat` below 0 deg is not supported. See Friedrich et al., \"FIRI-2018\"."
        )

    if chi > MAX_CHI:
        global _chi_clamp_warned
        if not _chi_clamp_warned:
            logger.warning("`chi` greater than %g deg uses `chi = %g deg`", MAX_CHI, MAX_CHI)
            _chi_clamp_warned = True
        chi = MAX_CHI

    mask = build_mask(table, f10_7=f10_7, month=month, doy=doy)

    chi_lo, chi_hi = twoclosest(table.header.chi, chi)
    lat_lo, lat_hi = twoclosest(table.header.lat, lat)

    mask = (
        mask
        & jnp.isin(table.header.chi, jnp.array([chi_lo, chi_hi]))
        & jnp.isin(table.header.lat, jnp.array([lat_lo, lat_hi]))
    )
    idxs = np.flatnonzero(np.asarray(mask))
    data = table.data

    if chi_lo == chi_hi and lat_lo == lat_hi:
        return data[:, idxs]

    if chi_lo == chi_hi:
        cols = _group_corners(table, idxs, [(chi_lo, lat_lo), (chi_lo, lat_hi)])
        return _lerp(data[:, cols[0]], data[:, cols[1]], lat_lo, lat_hi, lat)

    if lat_lo == lat_hi:
        cols = _group_corners(table, idxs, [(chi_lo, lat_lo), (chi_hi, lat_lo)])
        return _lerp(data[:, cols[0]], data[:, cols[1]], chi_lo, chi_hi, chi)

    # Corners ordered [(chi_lo, lat_lo), (chi_hi, lat_lo), (chi_lo, lat_hi), (chi_hi, lat_hi)]
    cols = _group_corners(
        table,
        idxs,
        [(chi_lo, lat_lo), (chi_hi, lat_lo), (chi_lo, lat_hi), (chi_hi, lat_hi)],
    )
    at_lat_lo = _lerp(data[:, cols[0]], data[:, cols[1]], chi_lo, chi_hi, chi)
    at_lat_hi = _lerp(data[:, cols[2]], data[:, cols[3]], chi_lo, chi_hi, chi)
    return _lerp(at_lat_lo, at_lat_hi, lat_lo, lat_hi, lat)
