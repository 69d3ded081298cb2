import dataclasses
import pytest

from red_alert.core.gazetteer import Coordinates, Gazetteer, GazetteerEntry
from red_alert.services.resolver import LocationResolver


def entry(key, label, label_en, area="עוטף עזה"):
    return GazetteerEntry(key, label, label_en, key.upper(), 26, area, 30)


@pytest.fixture
def overlapping_resolver():
    """A gazetteer where an earlier entry's name contains a later entry's name."""
    return LocationResolver(Gazetteer([
        entry("ashkelon_coast", "אשקלון - חוף", "Ashkelon Coast"),
        entry("ashkelon", "אשקלון", "Ashkelon"),
    ]))


def test_exact_match_wins_over_earlier_partial_match(overlapping_resolver):
    assert overlapping_resolver.resolve("אשקלון").key == "ashkelon"
    assert overlapping_resolver.resolve("Ashkelon").key == "ashkelon"
    assert overlapping_resolver.resolve("אשקלון - חוף").key == "ashkelon_coast"


def test_partial_match_when_entry_name_is_inside_text(overlapping_resolver):
    assert overlapping_resolver.resolve("אשקלון - מערב").key == "ashkelon"


def test_partial_match_when_text_is_inside_entry_name(overlapping_resolver):
    assert overlapping_resolver.resolve("Coast").key == "ashkelon_coast"


def test_no_match_returns_none(overlapping_resolver):
    assert overlapping_resolver.resolve("חיפה") is None
    assert overlapping_resolver.resolve("") is None


def test_every_default_name_resolves_to_its_own_entry(gazetteer, resolver):
    for item in gazetteer:
        assert resolver.resolve(item.label) is item
        assert resolver.resolve(item.label_en) is item


def test_feed_style_sub_area_names_resolve(resolver):
    assert resolver.resolve("תל אביב - מרכז העיר").key == "tel_aviv"
    assert resolver.resolve("שדרות, איבים, ניר עם").key == "sderot"


def test_suggest_offers_similar_locations(resolver):
    assert resolver.resolve("Jerusalm") is None
    assert "jerusalem" in resolver.suggest("Jerusalm")
    assert resolver.suggest("") == []


def test_gazetteer_is_read_only(gazetteer):
    with pytest.raises(TypeError):
        gazetteer.entries["eilat"] = entry("eilat", "אילת", "Eilat")
    with pytest.raises(dataclasses.FrozenInstanceError):
        gazetteer.get("haifa").shelter_seconds = 0


def test_gazetteer_rejects_duplicate_keys():
    with pytest.raises(ValueError, match="Duplicate gazetteer key"):
        Gazetteer([entry("a", "א", "A"), entry("a", "ב", "B")])


def test_gazetteer_keeps_insertion_order(gazetteer):
    assert gazetteer.keys() == ["tel_aviv", "jerusalem", "sderot", "ashkelon", "haifa", "beer_sheva", "netivot"]
    assert len(gazetteer) == 7
    assert "sderot" in gazetteer


def test_gazetteer_entry_serializes_with_upstream_field_names(gazetteer):
    data = gazetteer.get("sderot").to_dict()

    assert data["label"] == "שדרות"
    assert data["value"] == "SDEROT_001"
    assert data["areaid"] == 26
    assert data["areaname"] == "עוטף עזה"
    assert data["migun_time"] == 15
    assert data["coordinates"] == {"lat": 31.5244, "lng": 34.5951}


def test_entry_without_coordinates_omits_them():
    data = entry("x", "איקס", "X").to_dict()
    assert "coordinates" not in data
    assert Coordinates(1.0, 2.0).to_dict() == {"lat": 1.0, "lng": 2.0}
