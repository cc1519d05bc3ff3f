import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from curator.domain.seeds import extract_id, is_spotify_link, parse_link
from curator.errors import ValidationError

_ids = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789", min_size=1, max_size=30)
_queries = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789=&_-", max_size=20)
_kinds = st.sampled_from(["artist", "track"])


@pytest.mark.unit
def test_extract_id_strips_query_string():
    assert extract_id("https://open.spotify.com/artist/abc123?si=xyz") == "abc123"


@pytest.mark.unit
def test_extract_id_handles_trailing_slash_and_uri_form():
    assert extract_id("https://open.spotify.com/track/12345/") == "12345"
    assert extract_id("https://open.spotify.com/intl-de/track/12345?si=1") == "12345"
    assert extract_id("spotify:artist:4Z8W4fKeB5YxbusRsdQVPb") == "4Z8W4fKeB5YxbusRsdQVPb"


@pytest.mark.unit
@given(kind=_kinds, entity_id=_ids, query=_queries)
def test_extract_id_returns_last_segment_without_query(kind, entity_id, query):
    link = f"https://open.spotify.com/{kind}/{entity_id}"
    if query:
        link += f"?{query}"
    assert extract_id(link) == entity_id


@pytest.mark.unit
@given(text=st.text(max_size=40))
def test_links_without_accepted_prefix_are_rejected(text):
    assume(not text.strip().startswith(("https://open.spotify.com/", "spotify:")))
    assert not is_spotify_link(text.strip())
    with pytest.raises(ValidationError):
        parse_link(text, expected_kind="artist")


@pytest.mark.unit
@pytest.mark.parametrize("link", [
    "",
    "abc123",
    "http://open.spotify.com/artist/abc",
    "https://example.com/artist/abc",
    "https://open.spotify.com/",
    "https://open.spotify.com/artist/",
    "spotify:",
])
def test_parse_link_rejects_malformed_links(link):
    with pytest.raises(ValidationError):
        parse_link(link, expected_kind="artist")


@pytest.mark.unit
def test_parse_link_rejects_link_for_other_entity_kind():
    with pytest.raises(ValidationError) as excinfo:
        parse_link("https://open.spotify.com/track/abc", expected_kind="artist")
    assert excinfo.value.message == "Please enter a valid Spotify artist link."
    assert "track" in excinfo.value.detail


@pytest.mark.unit
def test_parse_link_accepts_uri_form_and_reports_kind():
    parsed = parse_link("  spotify:track:xyz  ", expected_kind="track")
    assert parsed.entity_id == "xyz"
    assert parsed.kind == "track"
    assert parsed.raw == "spotify:track:xyz"
