from dubstudio.common.strings.splitters import csv_to_list


def test_missing_value_is_empty():
    assert csv_to_list(None) == []
    assert csv_to_list("") == []


def test_cors_origins_from_env_string():
    raw = " http://localhost:3000, https://studio.example ,, "
    assert csv_to_list(raw) == ["http://localhost:3000", "https://studio.example"]


def test_image_formats_upper_cased_and_deduplicated():
    assert csv_to_list("png, jpeg,PNG , webp", upper=True) == ["PNG", "JPEG", "WEBP"]


def test_sequence_input_keeps_first_seen_order():
    assert csv_to_list(("GET", " POST ", "", None, "GET")) == ["GET", "POST"]
