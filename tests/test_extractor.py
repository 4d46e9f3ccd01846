# tests/test_extractor.py

from __future__ import annotations

import logging

import pytest

from gedcom_fan.extraction import extract_basic_info, extract_individuals, max_known_generations
from gedcom_fan.extraction.models import Individual
from gedcom_fan.loader import decode_gedcom, load_gedcom_file
from gedcom_fan.utils import tests_data_path


def test_identity_and_relationships(family_result):
    jean = family_result.individuals["@I1@"]

    assert (jean.name, jean.surname, jean.gender) == ("Jean", "Dupont", "M")
    assert jean.full_name == "Jean Dupont"
    assert jean.father_id == "@I2@"
    assert jean.mother_id == "@I3@"
    assert jean.sibling_ids == ["@I6@"]
    assert jean.spouse_ids == ["@I5@"]

    paul = family_result.individuals["@I6@"]
    assert paul.sibling_ids == ["@I1@"]

    pierre = family_result.individuals["@I2@"]
    assert pierre.father_id == "@I4@"
    assert pierre.mother_id is None
    assert pierre.spouse_ids == ["@I3@"]


def test_surname_alternative_is_reduced(family_result):
    marie = family_result.individuals["@I3@"]
    assert (marie.name, marie.surname, marie.gender) == ("Marie", "Martin", "F")


def test_birth_and_death(family_result):
    jean = family_result.individuals["@I1@"]

    assert jean.birth_date == "12/03/1920"
    assert jean.birth_year == 1920
    assert jean.death_date == "03/02/1990"
    assert jean.death_year == 1990
    assert jean.age == 69

    assert jean.birth_place.town == "Lyon"
    assert jean.birth_place.departement == "Rhône"
    assert jean.birth_place.latitude == pytest.approx(45.764)
    assert jean.birth_place.longitude == pytest.approx(4.8357)
    assert jean.death_place.town == "Villeurbanne"
    assert jean.bg_color == jean.birth_place.departement_color != ""


def test_qualified_date_and_french_town(family_result):
    pierre = family_result.individuals["@I2@"]

    assert pierre.birth_date == "1890"
    assert pierre.birth_place.town == "St-Étienne"
    assert pierre.birth_place.key == "st-etienne"
    assert pierre.birth_place.departement == "Loire"
    assert pierre.age is None


def test_occupations_ordered_by_year(family_result):
    jean = family_result.individuals["@I1@"]

    assert [(o.value, o.year, o.source) for o in jean.occupations] == [
        ("Apprenti", 1935, "EVEN"),
        ("Boulanger", 1945, "OCCU"),
    ]


def test_individual_events_order(family_result):
    jean = family_result.individuals["@I1@"]

    assert [(e.type, e.date) for e in jean.individual_events] == [
        ("birth", "12/03/1920"),
        ("occupation", "1935"),
        ("occupation", "1945"),
        ("marriage", "15/06/1945"),
        ("death", "03/02/1990"),
    ]

    marriage = jean.events_of_type("marriage")[0]
    assert marriage.town == "Paris"
    assert marriage.place_key == "paris"
    assert marriage.description == "Anne Leroy"


def test_substitute_events_disabled_by_default(family_result):
    louis = family_result.individuals["@I4@"]

    assert louis.birth_date == "1860"
    assert louis.birth_place.is_empty
    assert louis.death_date == ""
    assert louis.death_place.is_empty


def test_substitute_events_fall_back_to_chr_and_buri():
    tree = load_gedcom_file(tests_data_path("family.ged"))
    louis = extract_individuals(tree, substitute_events=True).individuals["@I4@"]

    # BIRT still wins over CHR
    assert louis.birth_date == "1860"
    assert louis.death_date == "1931"
    assert louis.death_place.town == "Montbrison"


def test_places_are_registered(family_result):
    places = family_result.places

    assert places.keys() == ["lyon", "villeurbanne", "paris", "st-etienne", "montbrison"]
    assert [(e.type, e.person_id) for e in places.get("lyon").events] == [
        ("birth", "@I1@"),
        ("marriage", "@I2@"),
        ("birth", "@I3@"),
        ("marriage", "@I3@"),
    ]
    assert {e.person_id for e in places.get("paris").events} == {"@I1@", "@I5@"}
    assert [e.type for e in places.get("montbrison").events] == ["baptism", "burial"]


def test_individual_without_famc_has_no_parents():
    tree = decode_gedcom(b"0 HEAD\n0 @I1@ INDI\n1 NAME Solo /Person/\n0 TRLR\n")
    solo = extract_individuals(tree).individuals["@I1@"]

    assert solo.father_id is None
    assert solo.mother_id is None
    assert solo.sibling_ids == []


def test_unresolved_references_are_logged_and_dropped(gedcom_logs):
    gedcom_logs.set_level(logging.WARNING)
    result = extract_individuals(load_gedcom_file(tests_data_path("broken_refs.ged")))

    lone = result.individuals["@I1@"]
    assert lone.father_id is None
    assert lone.mother_id is None

    other = result.individuals["@I2@"]
    assert other.gender is None
    assert other.spouse_ids == []

    messages = " ".join(r.getMessage() for r in gedcom_logs.records)
    assert "@I99@" in messages
    assert "@I98@" in messages
    assert "@I77@" in messages


def test_famc_only_link_is_followed():
    tree = decode_gedcom(
        b"0 @I1@ INDI\n1 FAMC @F1@\n"
        b"0 @I2@ INDI\n1 NAME Dad /X/\n"
        b"0 @F1@ FAM\n1 HUSB @I2@\n"
    )
    assert extract_individuals(tree).individuals["@I1@"].father_id == "@I2@"


def test_extract_basic_info_without_slashes_or_name():
    tree = decode_gedcom(b"0 @I1@ INDI\n1 NAME jean-PIERRE\n1 SEX f\n0 @I2@ INDI\n")

    assert extract_basic_info(tree.find_by_pointer("@I1@")) == ("Jean-Pierre", "", "F")
    assert extract_basic_info(tree.find_by_pointer("@I2@")) == ("", "", None)


def test_republican_dates_and_parenthesised_departement():
    result = extract_individuals(load_gedcom_file(tests_data_path("republican.ged")))
    claude = result.individuals["@I1@"]

    assert claude.birth_date == "03/01/1794"
    assert claude.death_date == "14/11/1805"
    assert claude.age == 11
    assert claude.birth_place.departement == "Loire-Atlantique"
    assert result.individuals["@I2@"].birth_date == "03/01/1794"


def test_max_known_generations(family_result):
    assert max_known_generations(family_result.individuals) == 3
    assert max_known_generations({}) == 0
    assert max_known_generations({"@A@": Individual(id="@A@")}) == 1


def test_max_known_generations_survives_parent_loop():
    a = Individual(id="@A@", father_id="@B@")
    b = Individual(id="@B@", father_id="@A@")
    assert max_known_generations({"@A@": a, "@B@": b}) == 2
