import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.search.models import SearchResultImage
from src.search.normalizer import normalize_images, sanitize_url


def test_sanitize_url_replaces_whitespace_runs():
    assert sanitize_url("http://a.com/x y.png") == "http://a.com/x%20y.png"
    assert sanitize_url("http://a.com/x \t\n y.png") == "http://a.com/x%20y.png"
    assert sanitize_url("http://a.com/clean.png") == "http://a.com/clean.png"


@pytest.mark.property
@given(st.text())
def test_sanitize_url_is_idempotent(url: str):
    once = sanitize_url(url)
    assert sanitize_url(once) == once
    assert not re.search(r"\s", once)


def test_annotated_images_drop_missing_or_empty_descriptions():
    raw = [
        {"url": "http://a.com/x y.png", "description": "a cat"},
        {"url": "http://b.com/z.png", "description": ""},
        {"url": "http://c.com/w.png"},
        {"url": "http://d.com/v.png", "description": None},
    ]

    images = normalize_images(raw, include_descriptions=True)

    assert images == [SearchResultImage(url="http://a.com/x%20y.png", description="a cat")]


def test_annotated_images_keep_provider_order():
    raw = [
        {"url": "http://a.com/1.png", "description": "one"},
        {"url": "http://a.com/2.png", "description": ""},
        {"url": "http://a.com/3.png", "description": "three"},
    ]

    images = normalize_images(raw, include_descriptions=True)

    assert [i.description for i in images] == ["one", "three"]


def test_annotated_images_skip_bare_strings_and_junk():
    raw = ["http://a.com/bare.png", 42, None, {"description": "no url"}]
    assert normalize_images(raw, include_descriptions=True) == []


def test_bare_images_are_wrapped_without_description():
    images = normalize_images(["http://a.com/a b.png", "http://b.com/c.png"], include_descriptions=False)

    assert [i.to_payload() for i in images] == [
        {"url": "http://a.com/a%20b.png"},
        {"url": "http://b.com/c.png"},
    ]


def test_missing_images_normalize_to_empty_list():
    assert normalize_images(None, include_descriptions=True) == []
    assert normalize_images([], include_descriptions=False) == []


@pytest.mark.property
@given(
    st.lists(
        st.fixed_dictionaries(
            {"url": st.text(min_size=1), "description": st.one_of(st.just(""), st.text())}
        )
    )
)
def test_every_kept_image_has_non_empty_description(raw: list[dict]):
    images = normalize_images(raw, include_descriptions=True)
    expected = [r for r in raw if r["description"] != ""]
    assert len(images) == len(expected)
    for image, source in zip(images, expected):
        assert image.description == source["description"]
        assert image.url == sanitize_url(source["url"])
