import json

import pytest

from urdle.models.game import WordEntry
from urdle.services.catalog import Catalog, decode_word_id, encode_word_id


def test_word_id_round_trip(catalog):
    for index in range(len(catalog)):
        assert decode_word_id(encode_word_id(index), len(catalog)) == index
        assert catalog.decode_word_id(catalog.encode_word_id(catalog[index])) == catalog[index]


def test_word_id_is_base36_of_xored_index():
    assert encode_word_id(0) == "hto"
    assert decode_word_id("HTO", 10) == 0


@pytest.mark.parametrize("word_id", ["", "!!", "zzzzzz", "-hto", "h_to", None])
def test_invalid_word_ids_decode_to_none(word_id):
    assert decode_word_id(word_id, 10) is None


def test_word_ids_parse_like_a_base36_prefix():
    assert decode_word_id(" +hto", 10) == 0
    assert decode_word_id("hto-", 10) == 0
    assert decode_word_id("hto_x", 10) == 0
    assert decode_word_id("htp?ref=share", 10) == 1


def test_lookups_miss_with_none(catalog):
    assert catalog.word_by_index(-1) is None
    assert catalog.word_by_index(len(catalog)) is None
    assert catalog.word_by_name("unknown") is None
    assert catalog.word_index(WordEntry("unknown")) is None
    assert catalog.word_by_name("CAT").word == "cat"
    assert catalog.word_index(catalog.word_by_name("eel")) == 2


def test_entries_default_quality(catalog):
    assert catalog.word_by_name("algorithm").quality == 2
    assert catalog.word_by_name("algorithm").example.startswith("The algorithm")


@pytest.mark.parametrize("records", [
    [],
    [{"word": "cat"}, {"word": "Cat"}],
    [{"word": "café"}],
    [{"word": "cat", "quality": 4}],
    [{"word": "cat", "definitions": "not a list"}],
    [{"definitions": []}],
])
def test_invalid_catalogs_are_rejected(records):
    with pytest.raises(ValueError):
        Catalog.from_records(records)


def test_bundled_catalog_loads():
    catalog = Catalog.from_json()
    assert len(catalog) >= 10
    assert all(entry.word == entry.word.lower() for entry in catalog)


def test_catalog_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        Catalog.from_json(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        Catalog.from_json(str(broken))

    good = tmp_path / "words.json"
    good.write_text(json.dumps([{"word": "Rizz", "definitions": ["Charm."]}]), encoding="utf-8")
    assert Catalog.from_json(str(good))[0].word == "rizz"
