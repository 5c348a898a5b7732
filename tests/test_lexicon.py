import dataclasses
import json

import pytest
from talentsift.core.lexicon import DEFAULT_LEXICON_PATH, LexiconError, get_lexicon, load_lexicon
from talentsift.core.location_extractor import extract_location
from talentsift.core.skill_matcher import extract_skills


def _write(tmp_path, payload) -> str:
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _default_payload() -> dict:
    return json.loads(DEFAULT_LEXICON_PATH.read_text(encoding="utf-8"))


def test_packaged_lexicon_loads():
    lexicon = load_lexicon()
    assert len(lexicon.resume_skills) == 28
    assert len(lexicon.indian_cities) >= 90
    assert "pune" in lexicon.indian_city_keys
    assert "customer success" in lexicon.skill_keys


def test_get_lexicon_is_cached():
    assert get_lexicon() is get_lexicon()


def test_lexicon_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        get_lexicon().resume_skills = ()


def test_missing_file(tmp_path):
    with pytest.raises(LexiconError, match="not found"):
        load_lexicon(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LexiconError, match="not valid JSON"):
        load_lexicon(path)


def test_missing_keys(tmp_path):
    with pytest.raises(LexiconError, match="missing keys"):
        load_lexicon(_write(tmp_path, {"indian_cities": []}))


def test_wrong_shape(tmp_path):
    payload = _default_payload()
    payload["resume_skills"] = "CRM"
    with pytest.raises(LexiconError, match="resume_skills"):
        load_lexicon(_write(tmp_path, payload))


def test_bad_boilerplate_pattern(tmp_path):
    payload = _default_payload()
    payload["boilerplate_patterns"] = ["("]
    with pytest.raises(LexiconError, match="boilerplate"):
        load_lexicon(_write(tmp_path, payload))


def test_lexicon_error_is_value_error():
    assert issubclass(LexiconError, ValueError)


def test_substitute_lexicon_is_used():
    lexicon = dataclasses.replace(get_lexicon(), resume_skills=("Golang", "Kafka"))
    assert extract_skills("golang and kafka and CRM", lexicon=lexicon) == ["Golang", "Kafka"]


def test_substitute_gazetteer(tmp_path):
    payload = _default_payload()
    payload["indian_cities"] = ["Mysuru"]
    lexicon = load_lexicon(_write(tmp_path, payload))
    assert extract_location("Jane Doe\nMysuru", lexicon=lexicon) == "Mysuru"
