import json

import pytest
import requests

import heatlibs.fn__libs as h
from heatlibs.fn__libs_models import EmptyDatasetError, MalformedRecordError


def _payload(records=None, base=8.66):
    if records is None:
        records = [
            {"year": 1753, "month": 1, "variance": -1.366},
            {"year": 1753, "month": 2, "variance": -2.223},
            {"year": 1754, "month": 1, "variance": 0.2},
        ]
    return {"baseTemperature": base, "monthlyVariance": records}


def test_parse_dataset_valid():
    dataset = h.f110__parse_dataset(_payload())

    assert dataset.base_temperature == 8.66
    assert len(dataset) == 3
    first = dataset.records[0]
    assert (first.year, first.month, first.variance) == (1753, 1, -1.366)
    assert isinstance(first.year, int) and isinstance(first.month, int)
    assert dataset.first_year == 1753
    assert dataset.last_year == 1754


def test_parse_dataset_keeps_input_order():
    records = [
        {"year": 1800, "month": 5, "variance": 0.1},
        {"year": 1799, "month": 12, "variance": 0.2},
    ]
    dataset = h.f110__parse_dataset(_payload(records))
    assert [r.year for r in dataset.records] == [1800, 1799]


def test_parse_dataset_empty():
    with pytest.raises(EmptyDatasetError):
        h.f110__parse_dataset(_payload([]))


@pytest.mark.parametrize(
    "record",
    [
        {"year": 1753, "month": 1},
        {"year": 1753, "month": 1, "variance": "abc"},
        {"year": 1753, "month": 1, "variance": None},
        {"year": 1753, "month": 1, "variance": float("nan")},
        {"year": 1753, "month": 1, "variance": float("inf")},
        {"year": 1753, "month": 13, "variance": 0.1},
        {"year": 1753, "month": 0, "variance": 0.1},
        {"year": 1753.5, "month": 1, "variance": 0.1},
        {"year": "1753", "month": 1, "variance": 0.1},
        {"year": 1753, "month": True, "variance": 0.1},
    ],
)
def test_parse_dataset_rejects_malformed_record(record):
    records = _payload()["monthlyVariance"] + [record]
    with pytest.raises(MalformedRecordError):
        h.f110__parse_dataset(_payload(records))


def test_malformed_error_names_rows():
    records = _payload()["monthlyVariance"] + [{"year": 1754, "month": 2, "variance": "x"}]
    with pytest.raises(MalformedRecordError, match="variance.*3"):
        h.f110__parse_dataset(_payload(records))


@pytest.mark.parametrize("base", [None, "8.66", float("nan"), True])
def test_parse_dataset_rejects_bad_base_temperature(base):
    with pytest.raises(MalformedRecordError):
        h.f110__parse_dataset(_payload(base=base))


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"baseTemperature": 8.66},
        {"baseTemperature": 8.66, "monthlyVariance": {"year": 1753}},
        {"baseTemperature": 8.66, "monthlyVariance": [1, 2, 3]},
    ],
)
def test_parse_dataset_rejects_bad_shape(payload):
    with pytest.raises(MalformedRecordError):
        h.f110__parse_dataset(payload)


def test_load_dataset_json(tmp_path):
    path = tmp_path / "global-temperature.json"
    path.write_text(json.dumps(_payload()), encoding="utf-8")

    dataset = h.f111__load_dataset_json(path)

    assert len(dataset) == 3


class _FakeResponse:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def test_fetch_dataset(monkeypatch):
    calls = {}

    def fake_get(url, timeout):
        calls["url"] = url
        calls["timeout"] = timeout
        return _FakeResponse(_payload())

    monkeypatch.setattr(h.requests, "get", fake_get)
    dataset = h.f112__fetch_dataset()

    assert calls["url"] == h.DATA_URL
    assert len(dataset) == 3


def test_fetch_dataset_http_error_propagates(monkeypatch):
    monkeypatch.setattr(h.requests, "get", lambda url, timeout: _FakeResponse({}, status=404))
    with pytest.raises(requests.HTTPError):
        h.f112__fetch_dataset("https://example.invalid/data.json")


def test_dataset_to_frame():
    df = h.f113__dataset_to_frame(h.f110__parse_dataset(_payload()))

    assert list(df.columns) == ["year", "month", "month_name", "variance", "temperature"]
    assert df["month_name"].tolist() == ["January", "February", "January"]
    assert df["temperature"].iloc[0] == pytest.approx(8.66 - 1.366)
