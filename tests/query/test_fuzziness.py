"""Tests for Fuzziness and Operator parsing."""

import pytest

from search_bridge.query import Fuzziness, Operator


class TestFuzzinessParsing:
    """Test Fuzziness.from_string."""

    @pytest.mark.parametrize("text", ["AUTO", "auto", " Auto "])
    def test_auto(self, text):
        fuzziness = Fuzziness.from_string(text)
        assert fuzziness.is_auto
        assert fuzziness == Fuzziness.auto()
        assert str(fuzziness) == "AUTO"

    def test_auto_with_custom_bounds(self):
        fuzziness = Fuzziness.from_string("AUTO:2,5")
        assert fuzziness == Fuzziness.auto(2, 5)
        assert str(fuzziness) == "AUTO:2,5"

    def test_auto_with_default_bounds_equals_auto(self):
        assert Fuzziness.from_string("AUTO:3,6") == Fuzziness.auto()

    @pytest.mark.parametrize(("text", "edits"), [("0", 0), ("1", 1), ("2", 2), ("2.0", 2)])
    def test_edit_distances(self, text, edits):
        fuzziness = Fuzziness.from_string(text)
        assert fuzziness == Fuzziness.from_edits(edits)
        assert str(fuzziness) == str(edits)

    @pytest.mark.parametrize(
        "text",
        ["", "  ", "3", "-1", "1.5", "abc", "inf", "nan", "AUTO:3", "AUTO:a,b", "AUTO:6,3"],
    )
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            Fuzziness.from_string(text)

    def test_invalid_edits_rejected_on_construction(self):
        with pytest.raises(ValueError):
            Fuzziness.from_edits(5)


class TestFuzzinessEdits:
    """Test resolving the edit distance for a term."""

    def test_fixed_edits_ignore_term(self):
        assert Fuzziness.from_edits(1).as_edits("a") == 1
        assert Fuzziness.from_edits(1).as_edits("elasticsearch") == 1

    def test_auto_thresholds(self):
        auto = Fuzziness.auto()
        assert auto.as_edits("ab") == 0
        assert auto.as_edits("abc") == 1
        assert auto.as_edits("abcde") == 1
        assert auto.as_edits("abcdef") == 2

    def test_fuzziness_is_hashable(self):
        assert len({Fuzziness.auto(), Fuzziness.from_string("auto"), Fuzziness.from_edits(1)}) == 2


class TestOperator:
    """Test Operator parsing."""

    @pytest.mark.parametrize(("text", "expected"), [("and", Operator.AND), ("OR", Operator.OR), ("And", Operator.AND)])
    def test_from_string_is_case_insensitive(self, text, expected):
        assert Operator.from_string(text) is expected

    def test_unknown_operator(self):
        with pytest.raises(ValueError):
            Operator.from_string("xor")

    def test_str(self):
        assert str(Operator.AND) == "AND"
