"""Options shared by the snak parsers."""

from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

OPTIONS = Union["SimplifySnakOptions", Dict[str, Any], None]

DEFAULT_TIME_CONVERTER = "iso"


class SimplifySnakOptions(BaseModel):
    """
    Options controlling how snak values are simplified.

    Accepts the camelCase spellings used by JSON clients
    (``keepRichValues``) as well as the field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    keep_rich_values: bool = False
    """Keep the full structure of values instead of a scalar."""

    entity_prefix: Any = None
    """Prefix prepended to entity ids, e.g. 'wd' gives 'wd:Q42'. Ignored unless a string."""

    time_converter: Any = DEFAULT_TIME_CONVERTER
    """
    Name of a time converter (iso, epoch, simple-day, none) or a callable.

    Names are checked when a time value is parsed, not here.
    """

    keep_types: bool = False
    """Wrap simplified snaks as {type, value}."""

    novalue_value: Any = None
    """Value given to snaks stating that the property has no value."""

    somevalue_value: Any = None
    """Value given to snaks stating that the property has an unknown value."""


def coerce_options(options: OPTIONS = None) -> SimplifySnakOptions:
    """
    Turn None, a dict or an options object into an options object.

    :param options:
    :return:
    """
    if options is None:
        return SimplifySnakOptions()
    if isinstance(options, SimplifySnakOptions):
        return options
    if isinstance(options, dict):
        return SimplifySnakOptions(**options)
    raise ValueError(f"Cannot interpret {type(options).__name__} as snak options")
