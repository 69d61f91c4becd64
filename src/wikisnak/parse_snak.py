"""Parse snak data values into simplified values, by datatype."""

import json
import logging
import re
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from wikisnak.options import DEFAULT_TIME_CONVERTER, OPTIONS, SimplifySnakOptions, coerce_options
from wikisnak.wikibase_time import (
    wikibase_time_to_epoch_time,
    wikibase_time_to_iso_string,
    wikibase_time_to_raw_string,
    wikibase_time_to_simple_day,
)

logger = logging.getLogger(__name__)

ISSUES_URL = "https://github.com/maxlath/wikibase-sdk/issues"

PARSER = Callable[[Dict, SimplifySnakOptions], Any]

ENTITY_LETTER = MappingProxyType(
    {
        "item": "Q",
        "lexeme": "L",
        "property": "P",
    }
)

# ex: http://www.wikidata.org/entity/
UNIT_PREFIX_PATTERN = re.compile(r"^https?://.*/entity/")

MAX_KEY_LENGTH = 100


class UnimplementedDatatypeError(ValueError):
    """No parser is registered for a datatype."""


class InvalidConverterKeyError(ValueError):
    """A time converter was requested by an unknown name."""


def simple(datavalue: Dict, options: SimplifySnakOptions) -> Any:
    return datavalue["value"]


def monolingualtext(datavalue: Dict, options: SimplifySnakOptions) -> Any:
    if options.keep_rich_values:
        return datavalue["value"]
    return datavalue["value"]["text"]


def entity(datavalue: Dict, options: SimplifySnakOptions) -> str:
    return prefixed_id(datavalue, options.entity_prefix)


def prefixed_id(datavalue: Dict, prefix: Any = None) -> str:
    """
    Get the id of an entity value, with an optional prefix.

    Older values only carry an entity type and a numeric id,
    e.g. ``{"entity-type": "item", "numeric-id": 42}``, which is Q42.

    :param datavalue:
    :param prefix: e.g. "wd", giving "wd:Q42"; anything but a string is ignored
    :return:
    """
    value = datavalue["value"]
    entity_id = value.get("id") or f"{ENTITY_LETTER[value['entity-type']]}{value['numeric-id']}"
    if isinstance(prefix, str):
        return f"{prefix}:{entity_id}"
    return entity_id


def quantity(datavalue: Dict, options: SimplifySnakOptions) -> Any:
    value = datavalue["value"]
    amount = float(value["amount"])
    if not options.keep_rich_values:
        return amount
    rich_value = {
        "amount": amount,
        "unit": UNIT_PREFIX_PATTERN.sub("", value["unit"]),
    }
    if value.get("upperBound") is not None:
        rich_value["upperBound"] = float(value["upperBound"])
    if value.get("lowerBound") is not None:
        rich_value["lowerBound"] = float(value["lowerBound"])
    return rich_value


def coordinate(datavalue: Dict, options: SimplifySnakOptions) -> Any:
    value = datavalue["value"]
    if options.keep_rich_values:
        return value
    return [value["latitude"], value["longitude"]]


def time(datavalue: Dict, options: SimplifySnakOptions) -> Any:
    value = datavalue["value"]
    converter = options.time_converter
    if not callable(converter):
        converter = get_time_converter(converter)
    time_value = converter(value)
    if not options.keep_rich_values:
        return time_value
    return {
        "time": time_value,
        "timezone": value.get("timezone"),
        "before": value.get("before"),
        "after": value.get("after"),
        "precision": value.get("precision"),
        "calendarmodel": value.get("calendarmodel"),
    }


# Each converter accepts either a time payload (which gives access to the
# precision) or the bare time string.
TIME_CONVERTERS: Mapping[str, Callable[[Any], Any]] = MappingProxyType(
    {
        "iso": wikibase_time_to_iso_string,
        "epoch": wikibase_time_to_epoch_time,
        "simple-day": wikibase_time_to_simple_day,
        "none": wikibase_time_to_raw_string,
    }
)


def get_time_converter(key: Any = DEFAULT_TIME_CONVERTER) -> Callable[[Any], Any]:
    """
    Look up a time converter by name.

    :param key: one of iso, epoch, simple-day, none (None means iso)
    :return:
    """
    if key is None:
        key = DEFAULT_TIME_CONVERTER
    converter = TIME_CONVERTERS.get(key) if isinstance(key, str) else None
    if converter is None:
        raise InvalidConverterKeyError(
            f"invalid converter key: {json.dumps(key, default=str)[:MAX_KEY_LENGTH]}"
        )
    return converter


PARSERS: Mapping[str, PARSER] = MappingProxyType(
    {
        "commonsMedia": simple,
        "external-id": simple,
        "geo-shape": simple,
        "globe-coordinate": coordinate,
        "math": simple,
        "monolingualtext": monolingualtext,
        "musical-notation": simple,
        "quantity": quantity,
        "string": simple,
        "tabular-data": simple,
        "time": time,
        "url": simple,
        "wikibase-entityid": entity,
        "wikibase-form": entity,
        "wikibase-item": entity,
        "wikibase-lexeme": entity,
        "wikibase-property": entity,
        "wikibase-sense": entity,
    }
)


def normalize_datatype(datatype: str) -> str:
    """
    Normalize the spelling of a datatype.

    >>> normalize_datatype("Musical notation")
    'musicalnotation'

    :param datatype:
    :return:
    """
    return re.sub(r"[\s-]", "", datatype.lower())


NORMALIZED_PARSERS: Mapping[str, PARSER] = MappingProxyType(
    {normalize_datatype(datatype): parser for datatype, parser in PARSERS.items()}
)


def parse_snak(datatype: Optional[str], datavalue: Dict, options: OPTIONS = None) -> Any:
    """
    Simplify a snak data value according to its datatype.

    When no datatype is given, the type of the data value is used instead;
    form and sense claims, and mediainfo statements, come without one.

    Datatypes are normalized first, so that e.g. the legacy "musical notation"
    datatype, or the "globecoordinate" type of mediainfo values, resolve
    to the same parser as their current spelling.

    :param datatype: declared datatype of the property, e.g. "wikibase-item"
    :param datavalue: a ``{"type": ..., "value": ...}`` dict
    :param options: options object, dict, or None for defaults
    :return: the simplified value
    """
    options = coerce_options(options)
    if not datatype:
        datatype = datavalue["type"]
        logger.debug(f"No datatype given, using data value type {datatype}")
    normalized_datatype = normalize_datatype(datatype)
    parser = NORMALIZED_PARSERS.get(normalized_datatype)
    if parser is None:
        raise UnimplementedDatatypeError(
            f"{normalized_datatype} claim parser isn't implemented. Please report to {ISSUES_URL}"
        )
    return parser(datavalue, options)
