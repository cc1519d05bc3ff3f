import pytest

from curator.errors import AuthError, NotFoundError, RecommendationError


def _artist(i):
    return f"https://open.spotify.com/artist/a{i}"


@pytest.mark.unit
def test_session_start_defers_token_until_first_action(service, token_provider):
    sess = service.start_session("s1")
    assert not sess.has_token
    assert token_provider.calls == 0
    assert len(sess.displayed_genres) == service.settings.genre_sample_size

    service.add_artist(sess, _artist(1))
    service.add_artist(sess, _artist(2))
    assert sess.current_token() == "stub-token"
    assert token_provider.calls == 1
    assert service.start_session("s1") is sess


@pytest.mark.unit
def test_token_failure_sets_error_and_retry_recovers(service, token_provider, resolver, recommender):
    token_provider.error = AuthError("Spotify rejected the client credentials.", detail="HTTP 400: bad")
    sess = service.start_session("s1")
    result = service.add_artist(sess, _artist(1))
    assert not result.ok
    assert result.error_code == "auth_error"
    assert "Could not connect to Spotify." in result.message
    assert not sess.has_token
    assert resolver.calls == []

    # no automatic refetch after a failed attempt
    service.toggle_genre(sess, "jazz")
    service.generate_playlist(sess)
    assert token_provider.calls == 1
    assert recommender.calls[0]["token"] == ""

    token_provider.error = None
    assert service.retry_token(sess).ok
    assert sess.current_token() == "stub-token"
    assert sess.last_error is None


@pytest.mark.unit
def test_failed_refresh_keeps_previous_token(service, token_provider):
    sess = service.start_session("s1")
    service.retry_token(sess)
    token_provider.error = AuthError("down")
    result = service.retry_token(sess)
    assert not result.ok
    assert result.error_code == "auth_error"
    assert sess.current_token() == "stub-token"


@pytest.mark.unit
def test_add_artist_success_and_invalid_link(service):
    sess = service.start_session("s1")
    ok = service.add_artist(sess, _artist(1))
    assert ok.ok and ok.data["added"] is True and ok.data["id"] == "a1"

    bad = service.add_artist(sess, "abc123")
    assert not bad.ok
    assert bad.error_code == "validation_error"
    assert bad.message == "Please enter a valid Spotify artist link."
    assert sess.last_error == bad.message
    assert sess.seeds.snapshot().artist_ids == ("a1",)


@pytest.mark.unit
def test_add_track_lookup_failure_reports_message(service, resolver):
    resolver.names["gone"] = NotFoundError("Could not find a Spotify track with id 'gone'.")
    sess = service.start_session("s1")
    result = service.add_track(sess, "https://open.spotify.com/track/gone")
    assert not result.ok
    assert result.error_code == "not_found"
    assert result.message.startswith("Error adding track. Please try again.")
    assert sess.seeds.snapshot().track_ids == ()


@pytest.mark.unit
def test_add_beyond_capacity_is_ignored(service):
    sess = service.start_session("s1")
    for i in range(5):
        service.add_artist(sess, _artist(i))
    result = service.add_artist(sess, _artist(9))
    assert result.ok
    assert result.data["added"] is False
    assert len(result.data["seeds"]["artists"]) == 5


@pytest.mark.unit
def test_remove_out_of_range_returns_not_found(service):
    sess = service.start_session("s1")
    result = service.remove_track(sess, 0)
    assert not result.ok
    assert result.error_code == "not_found"


@pytest.mark.unit
def test_generate_requires_at_least_one_seed(service, recommender):
    sess = service.start_session("s1")
    result = service.generate_playlist(sess)
    assert result.error_code == "validation_error"
    assert recommender.calls == []


@pytest.mark.unit
def test_generate_rejects_more_than_total_seed_limit(service, recommender):
    sess = service.start_session("s1")
    for i in range(3):
        service.add_artist(sess, _artist(i))
    for name in ("jazz", "blues", "soul"):
        service.toggle_genre(sess, name)
    result = service.generate_playlist(sess)
    assert result.error_code == "validation_error"
    assert "at most 5" in result.message
    assert recommender.calls == []


@pytest.mark.unit
def test_generate_stores_tracks(service, recommender):
    sess = service.start_session("s1")
    service.add_artist(sess, _artist(1))
    service.toggle_genre(sess, "jazz")
    result = service.generate_playlist(sess)

    assert result.ok
    assert result.data["count"] == 7
    assert sess.playlist_generated
    assert len(sess.recommended_tracks) == 7
    call = recommender.calls[0]
    assert call["token"] == "stub-token"
    assert call["seeds"].artist_ids == ("a1",)
    assert call["seeds"].genres == ("jazz",)


@pytest.mark.unit
def test_generate_failure_keeps_previous_playlist(service, recommender):
    sess = service.start_session("s1")
    service.toggle_genre(sess, "jazz")
    service.generate_playlist(sess)

    recommender.error = RecommendationError("Spotify could not generate recommendations.", detail="HTTP 500: x")
    result = service.generate_playlist(sess)
    assert result.error_code == "recommendation_error"
    assert result.message.startswith("Error generating playlist.")
    assert len(sess.recommended_tracks) == 7


@pytest.mark.unit
def test_second_generate_while_in_flight_is_busy(service, recommender):
    sess = service.start_session("s1")
    service.toggle_genre(sess, "jazz")
    inner = []
    recommender.before_return = lambda: inner.append(service.generate_playlist(sess))

    outer = service.generate_playlist(sess)
    assert outer.ok
    assert inner[0].error_code == "busy"
    assert len(recommender.calls) == 1


@pytest.mark.unit
def test_reset_during_generation_discards_result(service, recommender):
    sess = service.start_session("s1")
    service.toggle_genre(sess, "jazz")
    recommender.before_return = lambda: service.reset(sess)

    result = service.generate_playlist(sess)
    assert result.error_code == "stale"
    assert sess.recommended_tracks == []
    assert not sess.playlist_generated
    assert sess.seeds.snapshot().is_empty


@pytest.mark.unit
def test_search_genres_updates_displayed_list(service):
    sess = service.start_session("s1")
    genres = service.search_genres(sess, "house")
    assert genres and all("house" in g for g in genres)
    assert sess.displayed_genres == genres
    assert sess.genre_search == "house"


@pytest.mark.unit
def test_preference_toggles(service):
    sess = service.start_session("s1")
    assert service.toggle_dark_mode(sess) is True
    assert service.toggle_dark_mode(sess) is False
    assert service.toggle_show_all(sess) is True


@pytest.mark.unit
def test_end_session_drops_state(service):
    service.start_session("s1")
    assert service.end_session("s1") is True
    assert service.registry.get("s1") is None
