from dubstudio.common.naming.slugger import is_url_safe_slug, slugify, upload_identifier


def test_slugify_examples():
    assert slugify("Action & Adventure") == "action-adventure"
    assert slugify("  Funny__Name!! ") == "funny-name"
    assert slugify("Çizgi Dünyası") == "cizgi-dunyasi"
    assert slugify("!!!") == ""


def test_slugify_folds_letters_without_decomposition():
    assert slugify("Dünyası") == "dunyasi"
    assert slugify("Işık Straße") == "isik-strasse"
    assert slugify("Øresund Łódź") == "oresund-lodz"
    # dotless and dotted i no longer collapse to different slugs
    assert slugify("Kılıç") == slugify("Kilic")


def test_slugify_truncates_cleanly():
    assert slugify("a" * 10 + " b", max_len=11) == "a" * 10


def test_url_safe_slug():
    assert is_url_safe_slug("hollow-knight-2")
    assert not is_url_safe_slug("Hollow-Knight")
    assert not is_url_safe_slug("double--dash")
    assert not is_url_safe_slug("")


def test_upload_identifier_normalizes_seed():
    assert upload_identifier("  My Game: Deluxe ", "projectCover") == "my-game-deluxe"
    assert upload_identifier("snake_case-ok", "projectCover") == "snake_case-ok"


def test_upload_identifier_fallbacks():
    assert upload_identifier("???", "projectCover", fallback_id=42) == "42"
    assert upload_identifier("", "projectBanner", now=1700000000.5) == "new-projectBanner-1700000000500"
