import pytest


@pytest.mark.unit
def test_index_renders_sections(client):
    r = client.get('/')
    assert r.status_code == 200
    html = r.get_data(as_text=True)
    assert 'Similar/Favorite Artists' in html
    assert 'Select Genres' in html
    assert 'Generate Playlist' in html
    assert 'Reconnect to Spotify' not in html


@pytest.mark.unit
def test_add_artist_form_redirects_and_shows_chip(client):
    r = client.post('/ui/artists', data={'link': 'https://open.spotify.com/artist/abc123?si=xyz'})
    assert r.status_code == 302
    html = client.get('/').get_data(as_text=True)
    assert 'Artist abc123' in html


@pytest.mark.unit
def test_invalid_link_shows_error_banner(client):
    client.post('/ui/tracks', data={'link': 'abc123'})
    html = client.get('/').get_data(as_text=True)
    assert 'Please enter a valid Spotify track link.' in html


@pytest.mark.unit
def test_playlist_preview_and_show_all(client):
    client.post('/ui/genres/toggle', data={'name': 'jazz'})
    client.post('/ui/playlist')
    html = client.get('/').get_data(as_text=True)
    assert 'Regenerate Playlist' in html
    assert 'Song 4' in html
    assert 'Song 5' not in html
    assert '3:35' in html
    assert 'Show All' in html

    client.post('/ui/playlist/show-all')
    html = client.get('/').get_data(as_text=True)
    assert 'Song 6' in html
    assert 'Show Less' in html


@pytest.mark.unit
def test_missing_preview_is_labelled(app, client, recommender):
    from curator.models import RecommendedTrack
    from tests.support.stubs import make_track

    recommender.tracks = [RecommendedTrack.model_validate(make_track('Quiet', preview=None))]
    client.post('/ui/genres/toggle', data={'name': 'jazz'})
    client.post('/ui/playlist')
    html = client.get('/').get_data(as_text=True)
    assert 'No preview available' in html


@pytest.mark.unit
def test_genre_search_query_filters_buttons(client):
    html = client.get('/?q=metal').get_data(as_text=True)
    assert 'black-metal' in html
    assert 'heavy-metal' in html


@pytest.mark.unit
def test_theme_toggle_and_reset(client):
    client.post('/ui/theme')
    assert 'class="dark"' in client.get('/').get_data(as_text=True)
    client.post('/ui/genres/toggle', data={'name': 'jazz'})
    client.post('/ui/reset')
    html = client.get('/').get_data(as_text=True)
    assert 'aria-label="Remove jazz"' not in html


@pytest.mark.unit
def test_index_does_not_exchange_token(app, token_provider):
    assert app.test_client().get('/').status_code == 200
    assert token_provider.calls == 0


@pytest.mark.unit
def test_reconnect_button_after_failed_exchange(client, token_provider):
    from curator.errors import AuthError

    token_provider.error = AuthError("Spotify rejected the client credentials.")
    client.post('/ui/artists', data={'link': 'https://open.spotify.com/artist/a1'})
    html = client.get('/').get_data(as_text=True)
    assert 'Reconnect to Spotify' in html
    assert 'Could not connect to Spotify.' in html


@pytest.mark.unit
def test_full_artist_category_disables_input(client):
    for i in range(5):
        client.post('/ui/artists', data={'link': f'https://open.spotify.com/artist/a{i}'})
    html = client.get('/').get_data(as_text=True)
    assert 'placeholder="Enter Spotify artist link" disabled' in html
    assert 'placeholder="Enter Spotify track link" >' in html
