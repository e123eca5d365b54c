"""FIRI model tables.

Provides the immutable table containers used by the profile engine together
with parsing, downloading and caching of the published FIRI-2018 table.

Typical usage::

    from firijax.table import load_firi, values
    table = load_firi()
    chi_grid = values(table, "chi")
"""

from firijax.table._download import FIRI_URL, download_firi_archive, extract_firi_csv
from firijax.table._parsers import parse_firi_csv
from firijax.table._providers import (
    DEFAULT_MODEL,
    available_models,
    load_firi,
    load_firi_from_file,
)
from firijax.table._types import (
    AXES,
    FIRIHeader,
    FIRITable,
    ModelTableError,
    table_from_arrays,
    values,
)

__all__ = [
    "AXES",
    "DEFAULT_MODEL",
    "FIRIHeader",
    "FIRITable",
    "FIRI_URL",
    "ModelTableError",
    "available_models",
    "download_firi_archive",
    "extract_firi_csv",
    "load_firi",
    "load_firi_from_file",
    "parse_firi_csv",
    "table_from_arrays",
    "values",
]
