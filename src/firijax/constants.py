"""Constants of the FIRI-2018 lower-ionosphere model.

Grid values are those published with the FIRI-2018 table. They describe the
dataset, not the code: tables built with :func:`firijax.table.table_from_arrays`
may use any grid.

References:
    1. M. Friedrich, C. Pock and K. Torkar, *FIRI-2018, an updated empirical
       model of the lower ionosphere*, J. Geophys. Res. Space Physics, 123,
       6737-6751, 2018. doi:10.1029/2018JA025437
"""

MIN_DENSITY: float = 1e-4
"""Density floor [m^-3] applied after averaging or quantile reduction."""

MAX_CHI: float = 130.0
"""Largest tabulated solar zenith angle [deg]. Larger angles are clamped to it."""

MIN_ALTITUDE: float = 60_000.0
"""Stated lower validity limit of FIRI-2018 [m]. The file itself reaches 55 km."""

CHI_VALUES: tuple[int, ...] = (0, 30, 45, 60, 75, 80, 85, 90, 95, 100, 130)
"""Solar zenith angle grid [deg]."""

LAT_VALUES: tuple[int, ...] = (0, 15, 30, 45, 60)
"""Geographic latitude grid [deg]."""

F10_7_VALUES: tuple[int, ...] = (75, 130, 200)
"""F10.7 solar radio flux grid [sfu]."""

MONTH_VALUES: tuple[int, ...] = tuple(range(1, 13))
"""Month grid."""

# Default selection ranges cover the whole FIRI-2018 grid
DEFAULT_CHI: tuple[float, float] = (0, 130)
DEFAULT_LAT: tuple[float, float] = (0, 60)
DEFAULT_F10_7: tuple[float, float] = (75, 200)
DEFAULT_MONTH: tuple[int, int] = (1, 12)
