import pytest
from pydantic import ValidationError

from src.search.models import SearchDepth, SearchRequest, SearchResultImage, SearchResults


def test_search_request_defaults_are_explicit():
    request = SearchRequest(query="weather in oslo")
    assert request.max_results == 10
    assert request.search_depth == SearchDepth.BASIC
    assert request.include_domains == ()
    assert request.exclude_domains == ()


def test_search_request_none_depth_defaults_to_basic():
    assert SearchRequest(query="q", search_depth=None).search_depth == SearchDepth.BASIC


def test_search_request_rejects_blank_query_and_bad_values():
    with pytest.raises(ValidationError):
        SearchRequest(query="   ")
    with pytest.raises(ValidationError):
        SearchRequest(query="q", max_results=0)
    with pytest.raises(ValidationError):
        SearchRequest(query="q", search_depth="deep")


def test_search_request_is_immutable():
    request = SearchRequest(query="q")
    with pytest.raises(ValidationError):
        request.query = "other"


def test_search_request_domains_are_cleaned():
    request = SearchRequest(
        query="q",
        include_domains=[" a.com ", "", "b.com", "a.com"],
        exclude_domains="c.com, d.com",
    )
    assert request.include_domains == ("a.com", "b.com")
    assert request.exclude_domains == ("c.com", "d.com")


@pytest.mark.parametrize("domains", [5, {"a.com": 1}, ["a.com", 3]])
def test_search_request_rejects_malformed_domains(domains):
    with pytest.raises(ValidationError):
        SearchRequest(query="q", include_domains=domains)


def test_search_request_skips_null_domains():
    request = SearchRequest(query="q", include_domains=[None, "a.com", None])
    assert request.include_domains == ("a.com",)


def test_image_description_must_be_non_empty_when_present():
    with pytest.raises(ValidationError):
        SearchResultImage(url="http://a.com/x.png", description="")
    assert SearchResultImage(url="http://a.com/x.png").to_payload() == {"url": "http://a.com/x.png"}


def test_empty_results_shape():
    empty = SearchResults.empty("cat  ")
    assert empty.to_payload() == {
        "query": "cat  ",
        "results": [],
        "images": [],
        "number_of_results": 0,
    }


def test_results_json_keeps_extra_fields_and_image_shapes():
    results = SearchResults(
        query="q",
        results=[{"title": "t"}],
        images=[
            SearchResultImage(url="http://a.com/1.png", description="one"),
            SearchResultImage(url="http://a.com/2.png"),
        ],
        number_of_results=1,
        answer="42",
    )
    again = SearchResults.model_validate_json(results.to_json())
    assert again == results
    assert again.to_payload()["answer"] == "42"
    assert again.to_payload()["images"][1] == {"url": "http://a.com/2.png"}
