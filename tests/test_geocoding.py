"""Start/end resolution: lat,lng literals, gazetteer, Nominatim fallback."""

import pytest
import requests

from core import gazetteer, geocoding
from core.errors import InvalidInput, RouteUnavailable
from core.geocoding import coerce_location, parse_latlng, resolve_location
from core.textnorm import normalize_place
from models.incidents import Coordinate


@pytest.fixture
def places(tmp_path):
    path = tmp_path / "locations.yml"
    path.write_text(
        "locations:\n"
        "  hauz khas:\n"
        "    lat: 28.5494\n"
        "    lng: 77.2001\n"
        "    name: Hauz Khas Village\n"
        "    aliases: [hkv]\n"
        "  broken:\n"
        "    name: no coordinates\n",
        encoding="utf-8",
    )
    old = gazetteer._state["path"]
    gazetteer.set_path(str(path))
    yield path
    gazetteer.set_path(old)


@pytest.fixture
def no_network(monkeypatch):
    def fail(place):
        raise AssertionError(f"unexpected geocode call for {place!r}")
    monkeypatch.setattr(geocoding, "geocode", fail)


def test_normalize_place():
    assert normalize_place("  From   Connaught   Place ") == "connaught place"


def test_parse_latlng():
    c = parse_latlng(" 28.6139 , 77.2090 ")
    assert (c.latitude, c.longitude) == (28.6139, 77.2090)
    assert parse_latlng("Delhi") is None


@pytest.mark.parametrize("text", ["91,77", "28.6,181", "-90.5,0"])
def test_out_of_range_literal_is_invalid(text):
    with pytest.raises(InvalidInput):
        parse_latlng(text)


def test_coordinate_passes_through():
    c = Coordinate(latitude=1, longitude=2)
    assert resolve_location(c) is c


@pytest.mark.parametrize("loc", [None, "", "   "])
def test_blank_location_is_invalid(loc):
    with pytest.raises(InvalidInput):
        resolve_location(loc, "start")


def test_builtin_city_exact_and_partial(places, no_network):
    c = resolve_location("Noida")
    assert (c.latitude, c.longitude) == (28.5355, 77.3910)
    c = resolve_location("near Gurgaon bus stand")
    assert (c.latitude, c.longitude) == (28.4595, 77.0266)


def test_yaml_entries_and_aliases(places, no_network):
    assert resolve_location("Hauz Khas").latitude == 28.5494
    assert resolve_location("HKV").longitude == 77.2001
    # entry without coordinates is skipped
    assert gazetteer.lookup("broken") is None


def test_falls_back_to_nominatim(places, monkeypatch):
    monkeypatch.setattr(geocoding, "geocode", lambda place: (12.0, 76.6, "Mysuru"))
    c = resolve_location("Mysore Palace")
    assert (c.latitude, c.longitude) == (12.0, 76.6)


def test_unknown_place_is_route_unavailable(places, monkeypatch):
    monkeypatch.setattr(geocoding, "geocode", lambda place: None)
    with pytest.raises(RouteUnavailable) as exc:
        resolve_location("Atlantis", "end")
    assert exc.value.details["field"] == "end"


def test_single_letters_do_not_partially_match(places, monkeypatch):
    assert gazetteer.lookup("a") is None
    assert gazetteer.lookup("i") is None
    monkeypatch.setattr(geocoding, "geocode", lambda place: None)
    with pytest.raises(RouteUnavailable):
        resolve_location("a", "start")


class _Response:
    def __init__(self, payload):
        self.payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self.payload


def test_transient_nominatim_failure_is_not_cached(places, monkeypatch):
    calls = []

    def flaky_get(url, params=None, timeout=None):
        calls.append(params["q"])
        if len(calls) == 1:
            raise requests.ConnectionError("reset by peer")
        return _Response([{"lat": "26.8467", "lon": "80.9462", "display_name": "Lucknow"}])

    monkeypatch.setattr(geocoding, "http_get", flaky_get)
    geocoding._search.cache_clear()
    try:
        with pytest.raises(RouteUnavailable):
            resolve_location("Lucknow", "start")
        c = resolve_location("Lucknow", "start")
        assert (c.latitude, c.longitude) == (26.8467, 80.9462)
        assert len(calls) == 2
        # a successful lookup is served from the cache
        resolve_location("Lucknow", "start")
        assert len(calls) == 2
    finally:
        geocoding._search.cache_clear()


def test_coerce_location():
    assert coerce_location("  Noida ") == "Noida"
    c = coerce_location({"latitude": 28.5, "longitude": 77.3})
    assert (c.latitude, c.longitude) == (28.5, 77.3)
    with pytest.raises(InvalidInput):
        coerce_location({"latitude": 28.5, "longitude": 190}, "end")
    with pytest.raises(InvalidInput):
        coerce_location("100,10")
