# tests/domain/policies/test_project_rules.py
from datetime import date

from dubstudio.domain.entities.assignment import AssignmentSpec
from dubstudio.domain.enums import ProjectType, RoleInProject
from dubstudio.domain.policies.project_rules import (
    normalize_category_ids, pricing_for, validate_assignments, validate_project_fields,
)


def _fields(**overrides):
    base = dict(title="Hollow Knight", slug="hollow-knight", release_date=date(2024, 5, 1), project_type=ProjectType.game)
    base.update(overrides)
    return validate_project_fields(**base)


def test_valid_project_has_no_errors():
    assert _fields() == {}


def test_required_fields_reported_together():
    errors = _fields(title="  ", slug="", release_date=None)
    assert set(errors) == {"title", "slug", "releaseDate"}


def test_negative_price_rejected_for_games():
    assert _fields(price=-5)["price"] == ["Price must be 0 or positive."]
    assert _fields(price=0) == {}


def test_non_finite_price_rejected_for_games():
    assert _fields(price=float("nan"))["price"] == ["Price must be a number."]
    assert _fields(price=float("inf"))["price"] == ["Price must be a number."]


def test_release_date_strings_must_parse():
    assert _fields(release_date="2024-05-01") == {}
    assert _fields(release_date="2024-05-01T10:00:00Z") == {}
    assert _fields(release_date="01/05/2024")["releaseDate"] == ["Release date must be a valid date (YYYY-MM-DD)."]


def test_price_ignored_for_anime():
    assert _fields(project_type=ProjectType.anime, price=-5, currency="EURO") == {}


def test_currency_must_be_three_chars():
    assert "currency" in _fields(price=10, currency="TL")
    assert _fields(price=10, currency="try") == {}


def test_urls_must_start_with_http():
    errors = _fields(trailer_url="youtube.com/x", external_watch_url="ftp://x")
    assert set(errors) == {"trailerUrl", "externalWatchUrl"}
    assert _fields(trailer_url="https://youtu.be/x") == {}


def test_slug_format_is_optional():
    assert "slug" in _fields(slug="Hollow Knight")
    assert _fields(slug="Hollow Knight", check_slug_format=False) == {}


def test_character_ids_only_on_voice_actor_rows():
    problems = validate_assignments([
        AssignmentSpec(1, RoleInProject.VOICE_ACTOR, (3, 4)),
        AssignmentSpec(2, RoleInProject.DIRECTOR, (3,)),
    ])
    assert problems == ["Assignment 2: characters can only be linked to a VOICE_ACTOR assignment."]


def test_duplicate_artist_role_pairs_rejected():
    problems = validate_assignments([
        AssignmentSpec(1, RoleInProject.TRANSLATOR),
        AssignmentSpec(1, RoleInProject.DIRECTOR),
        AssignmentSpec(1, RoleInProject.TRANSLATOR),
    ])
    assert len(problems) == 1 and problems[0].startswith("Assignment 3:")


def test_category_ids_are_a_set():
    assert normalize_category_ids([3, 1, 3, 2, 1]) == [1, 2, 3]


def test_pricing_only_for_games_with_a_price():
    assert pricing_for(ProjectType.game, 49.9, " try ") == (49.9, "TRY")
    assert pricing_for(ProjectType.game, None, "TRY") == (None, None)
    assert pricing_for(ProjectType.anime, 10, "TRY") == (None, None)
