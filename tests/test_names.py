import pytest

from pageform.exc import MalformedFieldName
from pageform.helpers.names import flatten, join_name, next_index, parse_name


class TestParseName:
    @pytest.mark.parametrize(
        "name,segments",
        [
            ("foo", ["foo"]),
            ("foo[bar]", ["foo", "bar"]),
            ("base[foo][3][]", ["base", "foo", "3", ""]),
            ("a[]", ["a", ""]),
            ("f.o o[ba.r]", ["f.o o", "ba.r"]),
            ("foo]bar", ["foo]bar"]),
        ],
    )
    def test_segments(self, name, segments):
        assert parse_name(name) == segments

    @pytest.mark.parametrize(
        "name", ["", "[foo]", "foo[bar", "foo[bar]baz", "foo[bar][baz"]
    )
    def test_malformed(self, name):
        with pytest.raises(MalformedFieldName):
            parse_name(name)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError, match=r'Malformed field path "\[foo\]"'):
            parse_name("[foo]")


class TestJoinName:
    def test_join(self):
        assert join_name("foo", "bar") == "foo[bar]"
        assert join_name("foo[bar]", 3) == "foo[bar][3]"
        assert join_name("", "bar") == "bar"

    @pytest.mark.parametrize("base", ["foo", "foo[bar]", "a[b][]", "x.y[0]"])
    def test_round_trip(self, base):
        assert parse_name(join_name(base, "key")) == parse_name(base) + ["key"]


def test_next_index():
    assert next_index({}) == "0"
    assert next_index({"foo": 1}) == "0"
    assert next_index({"0": 1, "1": 2}) == "2"
    assert next_index({"5": 1, "baz": 2}) == "6"
    assert next_index({"05": 1}) == "0"
    assert next_index({"-3": 1}) == "0"


def test_flatten():
    data = {"bar": {"foo": ["x", "y"], "baz": "z"}, "qux": "q"}
    assert flatten(data) == {
        "bar[foo][0]": "x",
        "bar[foo][1]": "y",
        "bar[baz]": "z",
        "qux": "q",
    }
    assert flatten({"2": 2, "bar": {"baz": "fbb"}}, "foo") == {
        "foo[2]": 2,
        "foo[bar][baz]": "fbb",
    }
    assert flatten(["a"], "foo") == {"foo[0]": "a"}
    assert flatten({"empty": {}}) == {}
