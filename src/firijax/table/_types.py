"""Type definitions for FIRI model tables.

Provides the immutable containers the profile engine works on:

- :class:`FIRIHeader`: per-profile model parameters, one entry per column
  of the density matrix.
- :class:`FIRITable`: header, density matrix and altitude axis.

Both are :class:`~typing.NamedTuple` subclasses, which JAX treats as
pytrees, so a table can be passed through ``jax.tree_util`` helpers.
Tables are built once (see :func:`table_from_arrays` and the loaders in
:mod:`firijax.table`) and never mutated.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from firijax.config import get_dtype

AXES: tuple[str, ...] = ("chi", "lat", "f10_7", "month", "doy")
"""Header fields that can be selected or interpolated on."""


class ModelTableError(ValueError):
    """Raised when a model table violates a structural invariant.

    Examples are an altitude axis that does not match the density matrix,
    an unsorted interpolation grid, or a missing grid corner. These point
    at a corrupted table, not at a bad query.
    """


class FIRIHeader(NamedTuple):
    """Model parameters of every stored profile.

    Attributes:
        code: Opaque profile identifiers, one per profile.
        month: Month (1-12), shape ``(P,)``.
        chi: Solar zenith angle [deg], shape ``(P,)``.
        lat: Geographic latitude [deg], shape ``(P,)``.
        f10_7: F10.7 solar radio flux index [sfu], shape ``(P,)``.
        doy: Day of year, shape ``(P,)``, or ``None`` when the table
            revision does not carry it.
    """

    code: tuple[str, ...]
    month: Array
    chi: Array
    lat: Array
    f10_7: Array
    doy: Array | None = None


class FIRITable(NamedTuple):
    """An electron density model table.

    Attributes:
        header: Parameters of each profile, see :class:`FIRIHeader`.
        data: Electron density [m^-3], shape ``(A, P)``; column ``i`` is the
            profile described by entry ``i`` of the header.
        altitude: Strictly increasing altitudes [m], shape ``(A,)``.
    """

    header: FIRIHeader
    data: Array
    altitude: Array

    @property
    def n_profiles(self) -> int:
        """Number of stored profiles (columns of ``data``)."""
        return int(self.data.shape[1])

    @property
    def n_altitudes(self) -> int:
        """Number of altitude samples (rows of ``data``)."""
        return int(self.data.shape[0])

    def column(self, axis: str) -> Array:
        """Return the header column for *axis*.

        Raises:
            ValueError: If *axis* is not a model parameter of this table.
        """
        if axis not in AXES:
            raise ValueError(f"{axis!r} is not a FIRI model parameter. Expected one of {AXES}")
        col = getattr(self.header, axis)
        if col is None:
            raise ValueError(f"{axis!r} is not available in this table")
        return col


def table_from_arrays(
    *,
    month: ArrayLike,
    chi: ArrayLike,
    lat: ArrayLike,
    f10_7: ArrayLike,
    data: ArrayLike,
    altitude: ArrayLike,
    code: Sequence[str] | None = None,
    doy: ArrayLike | None = None,
) -> FIRITable:
    """Build a :class:`FIRITable` from plain arrays, validating its shape.

    Numeric header columns and the altitude axis are stored with the
    configured float dtype; ``month`` and ``doy`` are stored as integers.

    Args:
        month: Month of each profile.
        chi: Solar zenith angle of each profile [deg].
        lat: Latitude of each profile [deg].
        f10_7: F10.7 index of each profile [sfu].
        data: Density matrix [m^-3], shape ``(A, P)``.
        altitude: Altitude of each row of *data* [m], shape ``(A,)``.
        code: Profile identifiers. Defaults to the column number as a string.
        doy: Optional day of year of each profile.

    Returns:
        The validated table.

    Raises:
        ModelTableError: If lengths disagree, *data* is not 2-D, or the
            altitude axis is not strictly increasing.
    """
    dtype = get_dtype()
    data = jnp.asarray(data, dtype=dtype)
    altitude = jnp.asarray(altitude, dtype=dtype)

    if data.ndim != 2:
        raise ModelTableError(f"data must be 2-D (altitude x profile), got shape {data.shape}")
    n_alt, n_prof = data.shape
    if altitude.shape != (n_alt,):
        raise ModelTableError(
            f"altitude has {altitude.shape[0] if altitude.ndim else 0} samples "
            f"but data has {n_alt} rows"
        )
    if n_alt > 1 and not bool(jnp.all(jnp.diff(altitude) > 0)):
        raise ModelTableError("altitude must be strictly increasing")

    if code is None:
        code = [str(i) for i in range(n_prof)]
    code = tuple(str(c) for c in code)

    columns = {
        "month": jnp.asarray(month, dtype=jnp.int32),
        "chi": jnp.asarray(chi, dtype=dtype),
        "lat": jnp.asarray(lat, dtype=dtype),
        "f10_7": jnp.asarray(f10_7, dtype=dtype),
    }
    if doy is not None:
        columns["doy"] = jnp.asarray(doy, dtype=jnp.int32)

    for name, col in columns.items():
        if col.shape != (n_prof,):
            raise ModelTableError(f"header column {name!r} has shape {col.shape}, expected ({n_prof},)")
    if len(code) != n_prof:
        raise ModelTableError(f"header has {len(code)} codes but data has {n_prof} columns")

    header = FIRIHeader(code=code, **columns)
    return FIRITable(header=header, data=data, altitude=altitude)


def values(table: FIRITable, axis: str) -> Array:
    """Return the sorted distinct grid values of *axis* in *table*.

    Args:
        table: Model table.
        axis: One of ``"chi"``, ``"lat"``, ``"f10_7"``, ``"month"``, ``"doy"``.

    Returns:
        Sorted 1-D array of the distinct values.

    Raises:
        ValueError: If *axis* is not a model parameter of *table*.

    Examples:
        ```python
        from firijax.table import load_firi, values
        table = load_firi()
        values(table, "lat")  # Array([ 0., 15., 30., 45., 60.], dtype=float32)
        ```
    """
    return jnp.unique(table.column(axis))
