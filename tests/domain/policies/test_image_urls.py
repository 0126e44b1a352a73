# tests/domain/policies/test_image_urls.py
from dubstudio.domain.enums import PlaceholderKind
from dubstudio.domain.policies.image_urls import ImageTransforms, image_url

PLACEHOLDERS = {
    PlaceholderKind.banner: "/images/placeholder-banner.jpg",
    PlaceholderKind.cover: "/images/placeholder-cover.jpg",
    PlaceholderKind.avatar: "/images/default-avatar.png",
}


def _url(public_id, transforms=None, placeholder=None, cloud="studio"):
    return image_url(
        public_id, transforms, placeholder,
        cloud_name=cloud, host="https://res.cloudinary.com", placeholders=PLACEHOLDERS,
    )


def test_builds_delivery_url_with_transforms():
    t = ImageTransforms(width=400, height=600, crop="fill")
    assert _url("project_covers/hollow-knight", t) == (
        "https://res.cloudinary.com/studio/image/upload/w_400,h_600,c_fill,q_auto,f_auto/project_covers/hollow-knight"
    )


def test_quality_and_format_always_present():
    assert ImageTransforms().as_segment() == "q_auto,f_auto"
    assert ImageTransforms(radius="max", format="webp").as_segment() == "q_auto,f_webp,r_max"


def test_empty_id_uses_placeholder():
    assert _url(None) == PLACEHOLDERS[PlaceholderKind.banner]
    assert _url("", placeholder=PlaceholderKind.avatar) == PLACEHOLDERS[PlaceholderKind.avatar]


def test_absolute_and_site_relative_ids_pass_through():
    assert _url("https://cdn.example.com/a.png") == "https://cdn.example.com/a.png"
    assert _url("/static/a.png") == "/static/a.png"


def test_missing_cloud_name_falls_back():
    assert _url("project_covers/x", placeholder=PlaceholderKind.cover, cloud="") == PLACEHOLDERS[PlaceholderKind.cover]
