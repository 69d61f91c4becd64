"""Simplify whole snaks, including snaks without a value."""

import logging
from typing import Any, Dict, Iterable, List

from wikisnak.options import OPTIONS, coerce_options
from wikisnak.parse_snak import parse_snak

logger = logging.getLogger(__name__)

SOMEVALUE = "somevalue"
NOVALUE = "novalue"


def simplify_snak(snak: Dict, options: OPTIONS = None) -> Any:
    """
    Simplify a snak.

    Snaks of type ``somevalue`` (unknown value) and ``novalue`` carry no
    data value; they are replaced by the configured placeholders.

    :param snak: a snak dict, with snaktype, datatype and datavalue
    :param options:
    :return:
    """
    options = coerce_options(options)
    datatype = snak.get("datatype")
    datavalue = snak.get("datavalue")
    snaktype = snak.get("snaktype")
    if datavalue:
        value = parse_snak(datatype, datavalue, options)
    elif snaktype == SOMEVALUE:
        value = options.somevalue_value
    elif snaktype == NOVALUE:
        value = options.novalue_value
    else:
        logger.debug(f"Snak of type {snaktype} has no value: {snak}")
        value = None
    if options.keep_types:
        return {"type": datatype or (datavalue or {}).get("type"), "value": value}
    return value


def simplify_snaks(snaks: Iterable[Dict], options: OPTIONS = None) -> List:
    options = coerce_options(options)
    return [simplify_snak(snak, options) for snak in snaks]
