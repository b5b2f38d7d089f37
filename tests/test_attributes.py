"""Tests for tapline.capture.attributes — primitive prop filtering."""

from tapline.capture.attributes import filter_attributes


class TestFilterAttributes:
    """filter_attributes keeps str, number and bool values only."""

    def test_mixed_props(self) -> None:
        props = {"id": 42, "visible": True, "handler": lambda: None, "meta": {"a": 1}}
        assert filter_attributes(props) == {"id": 42, "visible": True}

    def test_strings_and_floats_kept_verbatim(self) -> None:
        props = {"title": "Buy", "opacity": 0.5, "count": 0, "enabled": False}
        assert filter_attributes(props) == props

    def test_none_and_containers_dropped(self) -> None:
        props = {"a": None, "b": [1, 2], "c": (1,), "d": object()}
        assert filter_attributes(props) == {}

    def test_none_props(self) -> None:
        assert filter_attributes(None) == {}

    def test_empty_props(self) -> None:
        assert filter_attributes({}) == {}

    def test_returns_new_dict(self) -> None:
        props = {"id": 1}
        result = filter_attributes(props)
        result["other"] = 2
        assert props == {"id": 1}
