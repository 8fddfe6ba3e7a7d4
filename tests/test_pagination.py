import pytest

from core.models.pagination import PagePayload, PageRequest, PageResult
from core.models.resources import GalleryItem


def test_page_request_params():
    assert PageRequest(page_size=12).to_params() == {"pageSize": 12}
    assert PageRequest(page_size=5, cursor='{"id":"x"}').to_params() == {
        "pageSize": 5,
        "cursor": '{"id":"x"}',
    }


def test_page_request_rejects_non_positive_size():
    with pytest.raises(ValueError):
        PageRequest(page_size=0)


def test_page_result_enforces_cursor_invariant():
    with pytest.raises(ValueError):
        PageResult(items=[], has_more=True, next_cursor=None)
    with pytest.raises(ValueError):
        PageResult(items=[], has_more=False, next_cursor="c1")


def test_payload_cursor_is_compact_json_of_last_doc():
    payload = PagePayload.from_body(
        {"data": [{"id": "g1", "judul": "Lomba"}], "hasMore": True, "lastDoc": {"id": "g1", "n": 2}}
    )

    result = payload.to_result(GalleryItem)

    assert result.next_cursor == '{"id":"g1","n":2}'
    assert result.items[0].title == "Lomba"


def test_payload_defaults_when_body_missing():
    result = PagePayload.from_body(None).to_result(GalleryItem)

    assert result == PageResult(items=[], has_more=False, next_cursor=None)


def test_payload_ignores_last_doc_when_no_more_pages():
    result = PagePayload.from_body({"data": [], "hasMore": False, "lastDoc": {"id": "z"}}).to_result(
        GalleryItem
    )

    assert result.has_more is False
    assert result.next_cursor is None
