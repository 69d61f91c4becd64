from copy import deepcopy

import pytest

from wikisnak import (
    NORMALIZED_PARSERS,
    PARSERS,
    InvalidConverterKeyError,
    SimplifySnakOptions,
    UnimplementedDatatypeError,
    get_time_converter,
    normalize_datatype,
    parse_snak,
)

ITEM_VALUE = {"type": "wikibase-entityid", "value": {"id": "Q42"}}
LEGACY_ITEM_VALUE = {
    "type": "wikibase-entityid",
    "value": {"entity-type": "item", "numeric-id": 42},
}
COORDINATE_VALUE = {"type": "globecoordinate", "value": {"latitude": 1, "longitude": 2}}
MONOLINGUAL_VALUE = {"type": "monolingualtext", "value": {"text": "hello", "language": "en"}}
TIME_VALUE = {
    "type": "time",
    "value": {
        "time": "+1952-03-11T00:00:00Z",
        "timezone": 0,
        "before": 0,
        "after": 0,
        "precision": 11,
        "calendarmodel": "http://www.wikidata.org/entity/Q1985727",
    },
}


@pytest.mark.parametrize(
    "datatype,expected",
    [
        ("wikibase-item", "wikibaseitem"),
        ("Wikibase-Item", "wikibaseitem"),
        ("wikibaseitem", "wikibaseitem"),
        ("musical notation", "musicalnotation"),
        ("globe-coordinate", "globecoordinate"),
        (" commons\tMedia ", "commonsmedia"),
    ],
)
def test_normalize_datatype(datatype, expected):
    assert normalize_datatype(datatype) == expected


def test_registry():
    assert len(NORMALIZED_PARSERS) == len(PARSERS)
    for datatype, parser in PARSERS.items():
        assert NORMALIZED_PARSERS[normalize_datatype(datatype)] is parser
    with pytest.raises(TypeError):
        NORMALIZED_PARSERS["foo"] = PARSERS["string"]


@pytest.mark.parametrize("datatype", ["Wikibase-Item", "wikibaseitem", "WIKIBASE ITEM"])
def test_datatype_variants(datatype):
    assert parse_snak(datatype, ITEM_VALUE) == parse_snak("wikibase-item", ITEM_VALUE)


@pytest.mark.parametrize(
    "datatype",
    [
        "commonsMedia",
        "external-id",
        "geo-shape",
        "math",
        "musical-notation",
        "string",
        "tabular-data",
        "url",
    ],
)
def test_simple(datatype):
    assert parse_snak(datatype, {"type": "string", "value": "foo"}) == "foo"


def test_missing_datatype_uses_value_type():
    assert parse_snak(None, ITEM_VALUE) == "Q42"
    assert parse_snak("", {"type": "string", "value": "foo"}) == "foo"
    # mediainfo statements come with a "globecoordinate" value type
    assert parse_snak(None, COORDINATE_VALUE) == [1, 2]


def test_unknown_datatype():
    with pytest.raises(UnimplementedDatatypeError) as e:
        parse_snak("bogus-type", {"type": "string", "value": "foo"})
    assert "bogustype claim parser isn't implemented" in str(e.value)
    assert isinstance(e.value, ValueError)


def test_monolingualtext():
    assert parse_snak("monolingualtext", MONOLINGUAL_VALUE) == "hello"
    assert parse_snak("monolingualtext", MONOLINGUAL_VALUE, {"keepRichValues": True}) == {
        "text": "hello",
        "language": "en",
    }


@pytest.mark.parametrize(
    "datatype",
    [
        "wikibase-entityid",
        "wikibase-form",
        "wikibase-item",
        "wikibase-lexeme",
        "wikibase-property",
        "wikibase-sense",
    ],
)
def test_entity(datatype):
    assert parse_snak(datatype, ITEM_VALUE) == "Q42"
    assert parse_snak(datatype, ITEM_VALUE, {"entityPrefix": "wd"}) == "wd:Q42"
    assert parse_snak(datatype, ITEM_VALUE, SimplifySnakOptions(entity_prefix="wd")) == "wd:Q42"


@pytest.mark.parametrize(
    "entity_type,expected",
    [
        ("item", "Q42"),
        ("property", "P42"),
        ("lexeme", "L42"),
    ],
)
def test_entity_without_id(entity_type, expected):
    datavalue = {
        "type": "wikibase-entityid",
        "value": {"entity-type": entity_type, "numeric-id": 42},
    }
    assert parse_snak("wikibase-entityid", datavalue) == expected


def test_entity_without_id_prefixed():
    assert parse_snak("wikibase-item", LEGACY_ITEM_VALUE, {"entity_prefix": "wd"}) == "wd:Q42"


def test_quantity():
    datavalue = {"type": "quantity", "value": {"amount": "12.5", "unit": "1"}}
    assert parse_snak("quantity", datavalue) == 12.5
    assert parse_snak("quantity", datavalue, {"keepRichValues": True}) == {
        "amount": 12.5,
        "unit": "1",
    }


def test_quantity_rich():
    datavalue = {
        "type": "quantity",
        "value": {"amount": "1", "unit": "http://www.wikidata.org/entity/Q11573"},
    }
    assert parse_snak("quantity", datavalue, {"keepRichValues": True}) == {
        "amount": 1,
        "unit": "Q11573",
    }


def test_quantity_bounds():
    datavalue = {
        "type": "quantity",
        "value": {
            "amount": "+1.96",
            "unit": "https://www.wikidata.org/entity/Q11573",
            "upperBound": "+1.97",
            "lowerBound": None,
        },
    }
    rich = parse_snak("quantity", datavalue, {"keepRichValues": True})
    assert rich == {"amount": 1.96, "unit": "Q11573", "upperBound": 1.97}
    assert "lowerBound" not in rich


def test_quantity_invalid_amount():
    datavalue = {"type": "quantity", "value": {"amount": "a lot", "unit": "1"}}
    with pytest.raises(ValueError):
        parse_snak("quantity", datavalue)


def test_globe_coordinate():
    assert parse_snak("globe-coordinate", COORDINATE_VALUE) == [1, 2]
    assert (
        parse_snak("globe-coordinate", COORDINATE_VALUE, {"keepRichValues": True})
        == COORDINATE_VALUE["value"]
    )


def test_time():
    assert parse_snak("time", TIME_VALUE) == "1952-03-11T00:00:00.000Z"
    assert parse_snak("time", TIME_VALUE, {"timeConverter": "simple-day"}) == "1952-03-11"
    assert parse_snak("time", TIME_VALUE, {"timeConverter": "none"}) == "+1952-03-11T00:00:00Z"
    assert parse_snak("time", TIME_VALUE, {"timeConverter": "epoch"}) == -562032000000


def test_time_rich():
    rich = parse_snak("time", TIME_VALUE, {"keepRichValues": True, "timeConverter": "simple-day"})
    assert rich == {
        "time": "1952-03-11",
        "timezone": 0,
        "before": 0,
        "after": 0,
        "precision": 11,
        "calendarmodel": "http://www.wikidata.org/entity/Q1985727",
    }


def test_time_custom_converter():
    def year(value):
        return int(value["time"][1:5])

    assert parse_snak("time", TIME_VALUE, {"timeConverter": year}) == 1952


def test_time_invalid_converter():
    with pytest.raises(InvalidConverterKeyError) as e:
        parse_snak("time", TIME_VALUE, {"timeConverter": "not-a-strategy"})
    assert str(e.value) == 'invalid converter key: "not-a-strategy"'


def test_invalid_converter_key_truncated():
    with pytest.raises(InvalidConverterKeyError) as e:
        get_time_converter("x" * 500)
    assert str(e.value) == "invalid converter key: " + ('"' + "x" * 99)


def test_default_converter():
    assert get_time_converter() is get_time_converter("iso")
    assert get_time_converter(None) is get_time_converter("iso")


@pytest.mark.parametrize(
    "datatype,datavalue",
    [
        ("wikibase-item", ITEM_VALUE),
        ("globe-coordinate", COORDINATE_VALUE),
        ("monolingualtext", MONOLINGUAL_VALUE),
        ("time", TIME_VALUE),
    ],
)
@pytest.mark.parametrize("keep_rich_values", [True, False])
def test_idempotent(datatype, datavalue, keep_rich_values):
    original = deepcopy(datavalue)
    options = {"keepRichValues": keep_rich_values}
    assert parse_snak(datatype, datavalue, options) == parse_snak(datatype, datavalue, options)
    assert datavalue == original


@pytest.mark.parametrize("prefix", [True, 5, ["wd"], None])
def test_entity_prefix_not_a_string(prefix):
    assert parse_snak("wikibase-item", ITEM_VALUE, {"entityPrefix": prefix}) == "Q42"


@pytest.mark.parametrize(
    "key,message",
    [
        (5, "invalid converter key: 5"),
        (["iso"], 'invalid converter key: ["iso"]'),
    ],
)
def test_time_converter_not_a_string(key, message):
    with pytest.raises(InvalidConverterKeyError) as e:
        parse_snak("time", TIME_VALUE, {"timeConverter": key})
    assert str(e.value) == message


def test_time_precision():
    datavalue = {"type": "time", "value": {"time": "+1990-05-17T00:00:00Z", "precision": 9}}
    assert parse_snak("time", datavalue) == "1990-01-01T00:00:00.000Z"
    assert parse_snak("time", datavalue, {"timeConverter": "simple-day"}) == "1990"
