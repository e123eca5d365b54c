"""Profile selection, interpolation and aggregation.

Typical usage::

    from firijax.profiles import interpolate_profiles, twoclosest
    profiles = interpolate_profiles(table, 89.0, 31.0, f10_7=(75, 130))
"""

from firijax.profiles._aggregate import firi, quantile
from firijax.profiles._interpolate import interpolate_profiles, select_profiles
from firijax.profiles._neighbors import twoclosest
from firijax.profiles._select import (
    ExactMatch,
    Range,
    Selector,
    as_selector,
    build_mask,
    select,
)

__all__ = [
    "ExactMatch",
    "Range",
    "Selector",
    "as_selector",
    "build_mask",
    "firi",
    "interpolate_profiles",
    "quantile",
    "select",
    "select_profiles",
    "twoclosest",
]
