import itertools

import jax.numpy as jnp
import numpy as np
import pytest

from firijax.config import set_dtype
from firijax.table import table_from_arrays

ALTITUDE = np.arange(60_000.0, 101_000.0, 1000.0)
CHI_GRID = (0.0, 30.0, 60.0, 100.0, 130.0)
LAT_GRID = (0.0, 30.0, 60.0)
F10_7_GRID = (75.0, 200.0)
MONTH_GRID = (1, 6)


def expected_profile(chi, lat, f10_7, month):
    """Density of the synthetic model, linear in chi and lat at every altitude."""
    return np.exp(ALTITUDE / 10_000.0) * (1000.0 + 2.0 * chi + 3.0 * lat + f10_7 + 10.0 * month)


def make_table(
    chi_grid=CHI_GRID,
    lat_grid=LAT_GRID,
    f10_7_grid=F10_7_GRID,
    month_grid=MONTH_GRID,
    profile=expected_profile,
):
    """Build a table laid out like FIRI: chi varies fastest, then lat, f10_7, month."""
    rows = [
        (chi, lat, f, m)
        for m, f, lat, chi in itertools.product(month_grid, f10_7_grid, lat_grid, chi_grid)
    ]
    data = np.stack([profile(*r) for r in rows], axis=1)
    return table_from_arrays(
        chi=[r[0] for r in rows],
        lat=[r[1] for r in rows],
        f10_7=[r[2] for r in rows],
        month=[r[3] for r in rows],
        data=data,
        altitude=ALTITUDE,
        code=[f"P{i:04d}" for i in range(len(rows))],
    )


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py has its own autouse fixture that sets float32.
    """
    set_dtype(jnp.float64)


@pytest.fixture
def table():
    return make_table()


@pytest.fixture
def table_factory():
    return make_table


@pytest.fixture
def expected():
    return expected_profile


FIRI_CSV = """\
Name,P1,P2,P3,P4,
Code,A01,A02,A03,A04,
Month,1,1,1,1,
DOY,15,15,15,15,
"Chi, deg",0,30,0,30,
"Lat, deg",0,0,15,15,
F10_7,75,75,75,75,
"Alt, km",,,,,
55,1.0e5,2.0e5,3.0e5,4.0e5,
60,1.0e6,2.0e6,3.0e6,4.0e6,
61,1.5e6,2.5e6,3.5e6,4.5e6,
62,2.0e6,3.0e6,4.0e6,5.0e6,
63,,,,,
,,,,,
"""
"""A miniature FIRI CSV export: 4 profiles, 55-63 km, incomplete last rows."""


@pytest.fixture
def firi_csv_text():
    return FIRI_CSV


@pytest.fixture
def firi_csv(tmp_path):
    path = tmp_path / "firi_test.csv"
    path.write_text(FIRI_CSV)
    return path
