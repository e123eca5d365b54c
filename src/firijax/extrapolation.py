"""Extension of density profiles to altitudes outside the tabulated range.

Two methods are provided:

- :func:`extrapolate_loglinear`: piecewise-linear interpolation of
  ``log(density)`` in altitude, extended linearly beyond both ends of the
  profile.
- :func:`extrapolate_exponential`: a least-squares fit of
  ``density(z) = p1 * exp(p2 * z)`` to the bottom of the profile, used at
  and below a cutoff altitude; the profile itself is kept above it.

:func:`extrapolate` dispatches between them.  All functions accept a single
profile of shape ``(A,)`` or a matrix of profiles of shape ``(A, K)``.
Altitudes may be in any unit as long as every argument uses the same one.
"""

from __future__ import annotations

import logging
import warnings

import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike
from scipy.optimize import OptimizeWarning, curve_fit

from firijax.constants import MIN_DENSITY
from firijax.table._types import FIRITable

logger = logging.getLogger(__name__)

_MAX_NFEV: int = 200
"""Function evaluation limit of the exponential least-squares fit."""


def _expmodel(z, p1, p2):
    return p1 * np.exp(p2 * z)


def _jacobian_expmodel(z, p1, p2):
    J = np.empty((z.shape[0], 2))
    J[:, 0] = np.exp(p2 * z)  # df/dp1
    J[:, 1] = z * p1 * J[:, 0]  # df/dp2
    return J


def _altitude_axis(z: ArrayLike | FIRITable) -> Array:
    if isinstance(z, FIRITable):
        return z.altitude
    return jnp.asarray(z)


def _validate(z: Array, profile: Array) -> None:
    if z.ndim != 1:
        raise ValueError("`z` must be one-dimensional.")
    if profile.ndim not in (1, 2):
        raise ValueError("`profile` must be a vector or an (altitude x profile) matrix.")
    if z.shape[0] != profile.shape[0]:
        raise ValueError("`z` and `profile` must be equal lengths.")
    if z.shape[0] < 2:
        raise ValueError("`z` needs at least two altitudes.")
    if not bool(jnp.all(jnp.diff(z) >= 0)):
        raise ValueError("`z` must be sorted.")


def _loglinear(z: Array, profile: Array, newz: Array) -> Array:
    logp = jnp.log(jnp.maximum(profile, MIN_DENSITY))
    idx = jnp.clip(jnp.searchsorted(z, newz, side="right") - 1, 0, z.shape[0] - 2)
    z0 = z[idx]
    z1 = z[idx + 1]
    t = (newz - z0) / (z1 - z0)
    if profile.ndim == 2:
        t = t[:, None]
    y0 = logp[idx]
    return jnp.exp(y0 + t * (logp[idx + 1] - y0))


def extrapolate_loglinear(
    z: ArrayLike | FIRITable,
    profile: ArrayLike,
    newz: ArrayLike,
) -> Array:
    """Return *profile* exponentially interpolated and extrapolated to *newz*.

    ``log(profile)`` is interpolated linearly between the altitudes *z* and
    extended linearly below and above them.  Densities below
    :data:`~firijax.constants.MIN_DENSITY` are raised to it before taking
    the logarithm.

    Args:
        z: Sorted altitudes of *profile*, or a :class:`FIRITable` whose
            altitude axis is used.
        profile: Density profile ``(A,)`` or matrix ``(A, K)``.
        newz: Altitudes to evaluate.

    Returns:
        Shape ``(len(newz),)`` or ``(len(newz), K)``.

    Raises:
        ValueError: If *z* and *profile* differ in length or *z* is not sorted.

    Examples:
        ```python
        import numpy as np
        from firijax import extrapolate_loglinear, firi
        ne = extrapolate_loglinear(table, firi(table), np.arange(30e3, 121e3, 1e3))
        ```
    """
    z = _altitude_axis(z)
    profile = jnp.asarray(profile)
    _validate(z, profile)
    newz = jnp.atleast_1d(jnp.asarray(newz, dtype=z.dtype))
    return _loglinear(z, profile, newz).astype(profile.dtype)


def _exponential_column(
    z: np.ndarray,
    profile: Array,
    newz: Array,
    max_altitude: float,
) -> Array:
    zf = np.asarray(z, dtype=np.float64)
    yf = np.asarray(profile, dtype=np.float64)

    mask = zf <= max_altitude
    if mask.sum() < 2:
        logger.warning(
            "Fewer than 2 samples at or below max_altitude=%g; fitting the 2 lowest samples.",
            max_altitude,
        )
        mask = np.zeros_like(mask)
        mask[:2] = True

    zfit = zf[mask]
    yfit = yf[mask]
    slope, intercept = np.polyfit(zfit, np.log(np.maximum(yfit, MIN_DENSITY)), 1)

    with warnings.catch_warnings():
        # Only the parameters are used; their covariance is irrelevant
        warnings.simplefilter("ignore", OptimizeWarning)
        popt, _ = curve_fit(
            _expmodel,
            zfit,
            yfit,
            p0=(np.exp(intercept), slope),
            jac=_jacobian_expmodel,
            maxfev=_MAX_NFEV,
        )

    nz = np.asarray(newz, dtype=np.float64)
    fitted = jnp.asarray(_expmodel(nz, *popt), dtype=profile.dtype)

    # Above the cutoff: sample values where newz hits a sample, log-linear elsewhere
    zj = jnp.asarray(z)
    idx = jnp.clip(jnp.searchsorted(zj, newz), 0, zj.shape[0] - 1)
    on_sample = zj[idx] == newz
    kept = jnp.where(on_sample, profile[idx], _loglinear(zj, profile, newz).astype(profile.dtype))

    return jnp.where(newz <= max_altitude, fitted, kept)


def extrapolate_exponential(
    z: ArrayLike | FIRITable,
    profile: ArrayLike,
    newz: ArrayLike,
    *,
    max_altitude: float | None = None,
    n: int | None = None,
) -> Array:
    """Return *profile* exponentially extrapolated at altitudes of *newz* below *z*.

    ``density(z) = p1 * exp(p2 * z)`` is fitted by nonlinear least squares
    to the profile samples from the bottom of *z* up to and including
    *max_altitude*.  The fit is evaluated at every altitude of *newz* at or
    below *max_altitude*; above it the profile values are copied (and
    log-linearly interpolated between samples).

    If *n* is provided, *max_altitude* is the *n*-th element of *z*
    (counting from 1) and overrides any given value.

    Args:
        z: Sorted altitudes of *profile*, or a :class:`FIRITable` whose
            altitude axis is used.
        profile: Density profile ``(A,)`` or matrix ``(A, K)``.
        newz: Altitudes to evaluate.
        max_altitude: Highest altitude used by the fit.
        n: Number of bottom samples used by the fit.

    Returns:
        Shape ``(len(newz),)`` or ``(len(newz), K)``.

    Raises:
        ValueError: If neither *max_altitude* nor *n* is given, *n* is out
            of range, *z* is not sorted, or *z* and *profile* differ in
            length.
        RuntimeError: If the least-squares fit does not converge.
    """
    if max_altitude is None and n is None:
        raise ValueError("At least one of `max_altitude` or `n` are required.")

    z = _altitude_axis(z)
    profile = jnp.asarray(profile)
    _validate(z, profile)
    newz = jnp.atleast_1d(jnp.asarray(newz, dtype=z.dtype))

    if float(jnp.max(newz)) > float(jnp.max(z)):
        logger.warning(
            "`newz` extends above `max(z)`. `profile` will only be extrapolated below `max_altitude`."
        )

    if n is not None:
        if not 1 <= n <= z.shape[0]:
            raise ValueError(f"`n` must be between 1 and {z.shape[0]}, got {n}")
        max_altitude = float(z[n - 1])

    zn = np.asarray(z)
    if profile.ndim == 1:
        return _exponential_column(zn, profile, newz, max_altitude)

    columns = [_exponential_column(zn, profile[:, i], newz, max_altitude) for i in range(profile.shape[1])]
    if not columns:
        return jnp.empty((newz.shape[0], 0), dtype=profile.dtype)
    return jnp.stack(columns, axis=1)


def extrapolate(
    z: ArrayLike | FIRITable,
    profile: ArrayLike,
    newz: ArrayLike,
    *,
    method: str | None = None,
    max_altitude: float | None = None,
    n: int | None = None,
) -> Array:
    """Extend *profile*, defined at altitudes *z*, to the altitudes *newz*.

    Args:
        z: Sorted altitudes of *profile*, or a :class:`FIRITable` whose
            altitude axis is used.
        profile: Density profile ``(A,)`` or matrix ``(A, K)``.
        newz: Altitudes to evaluate.
        method: ``"loglinear"`` or ``"exponential"``.  When ``None``, the
            exponential fit is used if *max_altitude* or *n* is given and
            the log-linear method otherwise.
        max_altitude: Cutoff of the exponential fit.
        n: Number of bottom samples used by the exponential fit.

    Returns:
        Shape ``(len(newz),)`` or ``(len(newz), K)``.

    Raises:
        ValueError: For an unknown *method*, a cutoff passed to the
            log-linear method, or any error of the chosen method.

    Examples:
        ```python
        import numpy as np
        from firijax import extrapolate, firi
        newz = np.arange(30e3, 121e3, 1e3)
        ne = extrapolate(table, firi(table), newz, max_altitude=65e3)
        ```
    """
    if method is None:
        method = "loglinear" if max_altitude is None and n is None else "exponential"

    if method == "loglinear":
        if max_altitude is not None or n is not None:
            raise ValueError("`max_altitude` and `n` only apply to the exponential method.")
        return extrapolate_loglinear(z, profile, newz)
    if method == "exponential":
        return extrapolate_exponential(z, profile, newz, max_altitude=max_altitude, n=n)
    raise ValueError(f"Unknown extrapolation method {method!r}. Expected 'loglinear' or 'exponential'")
