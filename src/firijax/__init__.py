"""
firijax provides access to the Faraday-International Reference Ionosphere
(FIRI-2018) electron density model, implemented in JAX.

Model profiles can be selected, interpolated in solar zenith angle and
latitude, averaged or summarized by quantiles, and extended below the
tabulated altitude range.
"""

from .constants import (
    CHI_VALUES,
    F10_7_VALUES,
    LAT_VALUES,
    MAX_CHI,
    MIN_ALTITUDE,
    MIN_DENSITY,
    MONTH_VALUES,
)

from .config import set_dtype, get_dtype

from .table import (
    FIRIHeader,
    FIRITable,
    ModelTableError,
    available_models,
    load_firi,
    load_firi_from_file,
    table_from_arrays,
    values,
)

from .profiles import (
    ExactMatch,
    Range,
    firi,
    interpolate_profiles,
    quantile,
    select_profiles,
    twoclosest,
)

from .extrapolation import (
    extrapolate,
    extrapolate_exponential,
    extrapolate_loglinear,
)
