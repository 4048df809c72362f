import pytest
from pydantic import ValidationError

from campuspoints.config import Settings


def test_reward_points_default():
    assert Settings().REWARD_POINTS == 5


@pytest.mark.parametrize("value", [0, -5])
def test_reward_points_must_be_positive(value):
    with pytest.raises(ValidationError):
        Settings(REWARD_POINTS=value)
