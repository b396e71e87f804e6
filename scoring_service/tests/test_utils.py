import pytest

from scoring_service.utils import is_falsy


@pytest.mark.parametrize("value", [None, False, 0, 0.0, "", float("nan")])
def test_falsy_values(value):
    assert is_falsy(value) is True


@pytest.mark.parametrize("value", [True, 1, -0.5, "0", " ", {}, [], {"maxSeconds": 60}])
def test_present_values(value):
    assert is_falsy(value) is False
