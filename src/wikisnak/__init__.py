"""
wikisnak: simplify Wikibase snak values.

Architecture
============

* :mod:`.parse_snak`: datatype registry and dispatcher
* :mod:`.wikibase_time`: conversions of Wikibase time values
* :mod:`.options`: options shared by the parsers
* :mod:`.simplify`: whole-snak simplification (somevalue, novalue)
* :mod:`.cli`: command line interface


"""
import importlib_metadata

try:
    __version__ = importlib_metadata.version(__name__)
except importlib_metadata.PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"  # pragma: no cover

from wikisnak.options import SimplifySnakOptions
from wikisnak.parse_snak import (
    NORMALIZED_PARSERS,
    PARSERS,
    TIME_CONVERTERS,
    InvalidConverterKeyError,
    UnimplementedDatatypeError,
    get_time_converter,
    normalize_datatype,
    parse_snak,
)
from wikisnak.simplify import simplify_snak, simplify_snaks

__all__ = [
    "SimplifySnakOptions",
    "PARSERS",
    "NORMALIZED_PARSERS",
    "TIME_CONVERTERS",
    "InvalidConverterKeyError",
    "UnimplementedDatatypeError",
    "get_time_converter",
    "normalize_datatype",
    "parse_snak",
    "simplify_snak",
    "simplify_snaks",
]
