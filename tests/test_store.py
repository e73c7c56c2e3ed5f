from gcrun.artifacts.store import digest_json, dumps_json, get_json, json_safe, put_json


def test_json_safe_keeps_small_values():
    obj = {"a": [1, -1, True, 0.5, None, "x"], "b": 2**63 - 1}
    assert json_safe(obj) == obj


def test_json_safe_stringifies_wide_ints():
    assert json_safe({"sum": 3 * 10**20, "neg": -(2**70)}) == {"sum": "300000000000000000000", "neg": str(-(2**70))}


def test_dumps_json_sorted_and_indented():
    assert dumps_json({"b": 1, "a": 2}) == b'{"a":2,"b":1}'
    assert dumps_json({"a": 1}, indent=True) == b'{\n  "a": 1\n}'


def test_put_and_get_round_trip(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    record = {"scale": 3 * 10**20, "results": [{"weighted_sum": 34}]}
    d = put_json(record)
    assert d == digest_json(record)
    assert put_json(record) == d
    assert get_json(d) == {"scale": "300000000000000000000", "results": [{"weighted_sum": 34}]}
