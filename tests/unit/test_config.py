"""Settings validation."""

import pytest
from pydantic import ValidationError

from leaddesk.core.config import Settings


def test_defaults_match_search_contract() -> None:
    settings = Settings(_env_file=None, secret_key="k")
    assert settings.search_default_limit == 10
    assert settings.search_max_limit == 50
    assert settings.search_min_query_length == 2
    assert settings.recent_search_retention == 10
    assert settings.recent_search_display_limit == 5


def test_secret_key_is_required() -> None:
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        Settings(_env_file=None, secret_key="")


@pytest.mark.parametrize(
    "overrides",
    [
        {"search_default_limit": 0},
        {"search_default_limit": 20, "search_max_limit": 10},
        {"search_min_query_length": 0},
        {"recent_search_retention": 0},
    ],
)
def test_inconsistent_search_bounds_are_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key="k", **overrides)