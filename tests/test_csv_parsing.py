"""Tests for delimited-text parsing and row decoding."""

import pytest

from transit_graph.adapters.source.csv_parsing import infer_scalar, parse_csv
from transit_graph.domain.errors import ParseError
from transit_graph.domain.models import EdgeRecord, NodeRecord, parse_routes


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", None),
        ("   ", None),
        ("true", True),
        ("FALSE", False),
        ("42", 42),
        ("-7", -7),
        ("2.5", 2.5),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("N1", "N1"),
        ("R1|R2", "R1|R2"),
    ],
)
def test_infer_scalar(raw, expected):
    assert infer_scalar(raw) == expected
    assert type(infer_scalar(raw)) is type(expected)


def test_parse_csv_uses_header_and_skips_blank_lines():
    text = "id,name,lat,lng\n\nN1,Alpha,48.8,2.3\n   \nN2,Beta,45.7,4.8\n"

    rows = parse_csv(text)

    assert rows == [
        {"id": "N1", "name": "Alpha", "lat": 48.8, "lng": 2.3},
        {"id": "N2", "name": "Beta", "lat": 45.7, "lng": 4.8},
    ]


def test_parse_csv_handles_quoted_fields_and_crlf():
    text = 'id,name\r\n1,"Saint-Étienne, Châteaucreux"\r\n'

    rows = parse_csv(text)

    assert rows == [{"id": 1, "name": "Saint-Étienne, Châteaucreux"}]


def test_parse_csv_custom_delimiter():
    rows = parse_csv("id;frequency\nE1;3\n", delimiter=";")
    assert rows == [{"id": "E1", "frequency": 3}]


def test_parse_csv_ragged_row_raises_with_line():
    text = "id,name\nN1,Alpha\nN2,Beta,extra\n"

    with pytest.raises(ParseError) as excinfo:
        parse_csv(text, location="nodes.csv")

    assert excinfo.value.line == 3
    assert excinfo.value.location == "nodes.csv"


def test_parse_csv_empty_document_raises():
    with pytest.raises(ParseError):
        parse_csv("\n\n")


def test_parse_csv_duplicate_header_raises():
    with pytest.raises(ParseError):
        parse_csv("id,id\n1,2\n")


def test_parse_csv_header_only_yields_no_rows():
    assert parse_csv("id,name,lat,lng\n") == []


def test_node_record_from_row_coerces_numeric_id():
    record = NodeRecord.from_row({"id": 12, "name": "Alpha", "lat": 1, "lng": 2.5})

    assert record == NodeRecord(id="12", name="Alpha", lat=1.0, lng=2.5)


def test_node_record_missing_column():
    with pytest.raises(ParseError) as excinfo:
        NodeRecord.from_row({"id": "N1", "name": "Alpha", "lat": 1.0}, row_number=4)
    assert excinfo.value.row_number == 4
    assert "lng" in excinfo.value.message


def test_node_record_non_numeric_latitude():
    with pytest.raises(ParseError):
        NodeRecord.from_row({"id": "N1", "name": "A", "lat": "north", "lng": 1.0})


def test_edge_record_from_row():
    record = EdgeRecord.from_row(
        {"id": "E1", "source": "N1", "target": "N2", "frequency": 10, "routes": "R1|R2"}
    )

    assert record.routes == {"R1", "R2"}
    assert record.frequency == 10.0


def test_edge_record_rejects_missing_frequency():
    with pytest.raises(ParseError):
        EdgeRecord.from_row(
            {"id": "E1", "source": "N1", "target": "N2", "frequency": None}
        )


def test_edge_record_keeps_non_positive_frequency():
    record = EdgeRecord.from_row(
        {"id": "E1", "source": "N1", "target": "N2", "frequency": 0, "routes": None}
    )
    assert record.frequency == 0.0
    assert record.routes == frozenset()


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, set()),
        ("", set()),
        ("R1", {"R1"}),
        (" R1 | R2 ||", {"R1", "R2"}),
        (7, {"7"}),
        (["A", "B"], {"A", "B"}),
    ],
)
def test_parse_routes(value, expected):
    assert parse_routes(value) == expected


def test_parse_routes_custom_separator():
    assert parse_routes("R1;R2", separator=";") == {"R1", "R2"}
