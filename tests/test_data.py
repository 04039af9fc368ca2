import dataclasses
import json

import pytest
import requests

import data
from data import (
    Dataset,
    NetworkError,
    ParseError,
    VarianceRecord,
    describe_dataset,
    load_dataset,
    parse_dataset,
)


class StubSession:
    """Stands in for requests.Session: returns a canned response or raises."""

    def __init__(self, *, status: int = 200, body: bytes = b"{}", exc: Exception = None):
        self.status = status
        self.body = body
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        resp = requests.Response()
        resp.status_code = self.status
        resp._content = self.body
        resp.url = url
        return resp


def test_parse_dataset_normalizes_month_and_temperature(payload):
    ds = parse_dataset(payload)
    assert ds.base_temperature == pytest.approx(8.66)
    assert len(ds.records) == len(payload["monthlyVariance"])
    for raw, rec in zip(payload["monthlyVariance"], ds.records):
        assert rec.month == raw["month"] - 1
        assert 0 <= rec.month <= 11
        assert rec.temperature == pytest.approx(ds.base_temperature + rec.variance)


def test_parse_dataset_first_record_scenario(payload):
    first = parse_dataset(payload).records[0]
    assert first.year == 1753
    assert first.month == 0
    assert first.temperature == pytest.approx(2.59)


def test_parse_dataset_skips_malformed_entries(caplog):
    raw = {
        "baseTemperature": 8.0,
        "monthlyVariance": [
            {"year": 1800, "month": 1, "variance": 1.0},
            {"year": 1800, "month": 2},
            {"year": 1800, "month": 13, "variance": 0.1},
            {"year": "abc", "month": 3, "variance": 0.1},
            None,
        ],
    }
    with caplog.at_level("WARNING", logger="heat_map.data"):
        ds = parse_dataset(raw)
    assert [r.year for r in ds.records] == [1800]
    assert "Skipped 4 of 5" in caplog.text


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"monthlyVariance": []},
        {"baseTemperature": "8.66", "monthlyVariance": []},
        {"baseTemperature": 8.66},
        {"baseTemperature": 8.66, "monthlyVariance": {"year": 1753}},
    ],
)
def test_parse_dataset_rejects_bad_shape(raw):
    with pytest.raises(ParseError):
        parse_dataset(raw)


def test_load_dataset_success(payload):
    session = StubSession(body=json.dumps(payload).encode())
    ds = load_dataset("http://example.test/data.json", timeout=3, session=session)
    assert session.calls == [("http://example.test/data.json", 3)]
    assert len(ds.records) == 5


def test_load_dataset_http_error_is_network_error():
    session = StubSession(status=404, body=b"not found")
    with pytest.raises(NetworkError):
        load_dataset("http://example.test/missing.json", session=session)


def test_load_dataset_connection_error_is_network_error():
    session = StubSession(exc=requests.ConnectionError("unreachable"))
    with pytest.raises(NetworkError):
        load_dataset("http://example.test/data.json", session=session)


def test_load_dataset_invalid_json_is_parse_error():
    session = StubSession(body=b"<html>oops</html>")
    with pytest.raises(ParseError):
        load_dataset("http://example.test/data.json", session=session)


def test_errors_share_base_class():
    assert issubclass(NetworkError, data.HeatMapDataError)
    assert issubclass(ParseError, data.HeatMapDataError)


def test_dataset_helpers(dataset):
    assert dataset.years() == [1753, 1760, 1770]
    assert dataset.year_range() == (1753, 1770)
    lo, hi = dataset.temperature_extent()
    assert lo == pytest.approx(2.59)
    assert hi == pytest.approx(11.86)
    frame = dataset.to_frame()
    assert list(frame.columns) == ["year", "month", "variance", "temperature"]
    assert len(frame) == 5


def test_describe_dataset_uses_loaded_values(dataset):
    assert describe_dataset(dataset) == "1753 - 1770: base temperature 8.66℃"


def test_records_are_immutable():
    rec = VarianceRecord(year=1900, month=0, variance=0.0, temperature=8.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.year = 1901
    empty = Dataset(base_temperature=8.0, records=())
    assert empty.is_empty


def test_year_range_unsorted_and_empty():
    records = tuple(
        VarianceRecord(year=y, month=0, variance=0.0, temperature=8.0) for y in (1900, 1753, 2015, 1800)
    )
    assert Dataset(base_temperature=8.0, records=records).year_range() == (1753, 2015)
    with pytest.raises(ValueError):
        Dataset(base_temperature=8.0, records=()).year_range()
