# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "firijax"]
#
# [tool.uv.sources]
# firijax = { path = ".." }
# ///
"""Print a FIRI-2018 electron density profile extended below 60 km.

Downloads the FIRI-2018 table on first use (cached under
``~/.cache/firijax``), interpolates the model at the requested solar zenith
angle and latitude, averages over the selected months and solar flux
levels, and extends the mean profile down to ``--bottom`` km.

Requires firijax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/profile.py [OPTIONS]

Examples:
    # Mid-latitude summer noon, default log-linear extension
    uv run examples/profile.py --chi 30 --lat 45 --month-lo 6 --month-hi 8

    # Night side, exponential fit to the 6 lowest samples
    uv run examples/profile.py --chi 160 --lat 15 --n 6
"""

import logging
from typing import Annotated

import jax.numpy as jnp
import numpy as np
import typer

from firijax import extrapolate, firi, load_firi, set_dtype

set_dtype(jnp.float64)


def main(
    chi: Annotated[float, typer.Option(help="Solar zenith angle in degrees")] = 45.0,
    lat: Annotated[float, typer.Option(help="Latitude in degrees (northern hemisphere)")] = 30.0,
    month_lo: Annotated[int, typer.Option(help="First month of the selection")] = 1,
    month_hi: Annotated[int, typer.Option(help="Last month of the selection")] = 12,
    f107_lo: Annotated[float, typer.Option(help="Lowest F10.7 of the selection")] = 75.0,
    f107_hi: Annotated[float, typer.Option(help="Highest F10.7 of the selection")] = 200.0,
    bottom: Annotated[float, typer.Option(help="Lowest output altitude in km")] = 40.0,
    top: Annotated[float, typer.Option(help="Highest output altitude in km")] = 110.0,
    step: Annotated[float, typer.Option(help="Output altitude step in km")] = 1.0,
    n: Annotated[
        int | None, typer.Option(help="Fit an exponential to the N lowest samples")
    ] = None,
) -> None:
    """Print altitude [km] and electron density [m^-3] columns."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    table = load_firi()
    profile = firi(table, chi, lat, f10_7=(f107_lo, f107_hi), month=(month_lo, month_hi))

    newz = np.arange(bottom, top + step / 2, step) * 1e3
    ne = extrapolate(table, profile, newz, n=n)

    for z, value in zip(newz, np.asarray(ne)):
        print(f"{z / 1e3:8.1f} {value:12.4e}")


if __name__ == "__main__":
    typer.run(main)
