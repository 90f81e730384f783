from urdle.services import game_service as game_service_module
from urdle.services.catalog import encode_word_id

CAT_ROUTE = f"#/w/{encode_word_id(0)}"


def new_game(client, route=CAT_ROUTE, player="tester"):
    response = client.post('/api/new_game', json={'route': route}, headers={'X-Player-Id': player})
    assert response.status_code == 200
    return response.get_json()


def type_word(client, game_id, word):
    for letter in word:
        response = client.post(f'/api/game/{game_id}/letter', json={'letter': letter})
        assert response.status_code == 200


def test_new_game_returns_initial_state(client):
    data = new_game(client)
    assert data['success'] is True
    assert data['redirect'] is None
    state = data['state']
    assert state['mode'] == 'word'
    assert state['word_length'] == 3
    assert state['status'] == 'playing'
    assert state['definitions'] == ['A small ___-like pet.', None, None]
    assert state['answer'] is None


def test_random_route_returns_redirect(client):
    data = new_game(client, route='#/random')
    assert data['redirect'].startswith('#/w/')
    assert data['state']['mode'] == 'random'


def test_play_to_win(client):
    game_id = new_game(client)['game_id']
    type_word(client, game_id, 'cat')

    response = client.post(f'/api/game/{game_id}/guess')
    data = response.get_json()
    assert data['accepted'] is True
    assert data['state']['status'] == 'won'
    assert data['state']['answer'] == 'cat'
    assert data['state']['guess_results'] == [[['c', 'correct'], ['a', 'correct'], ['t', 'correct']]]

    share = client.get(f'/api/game/{game_id}/share').get_json()
    assert share['text'].startswith('Urdle 1/6')


def test_short_guess_shakes(client):
    game_id = new_game(client)['game_id']
    type_word(client, game_id, 'ca')
    data = client.post(f'/api/game/{game_id}/guess').get_json()
    assert data['accepted'] is False
    assert data['state']['shake'] is True
    assert data['state']['guesses'] == []


def test_delete_letter(client):
    game_id = new_game(client)['game_id']
    type_word(client, game_id, 'ca')
    data = client.post(f'/api/game/{game_id}/delete').get_json()
    assert data['deleted'] is True
    assert data['state']['current_input'] == 'c'


def test_letter_validation(client):
    game_id = new_game(client)['game_id']
    assert client.post(f'/api/game/{game_id}/letter', json={}).status_code == 400
    assert client.post(f'/api/game/{game_id}/letter', json={'letter': '1'}).status_code == 400
    assert client.post(f'/api/game/{game_id}/letter', json={'letter': 'ab'}).status_code == 400


def test_unknown_game_is_404(client):
    assert client.get('/api/game/missing/state').status_code == 404
    assert client.post('/api/game/missing/letter', json={'letter': 'a'}).status_code == 404
    assert client.post('/api/game/missing/guess').status_code == 404
    assert client.get('/api/game/missing/share').status_code == 404


def test_state_and_delete(client):
    game_id = new_game(client)['game_id']
    state = client.get(f'/api/game/{game_id}/state').get_json()
    assert state['state']['game_id'] == game_id

    assert client.delete(f'/api/game/{game_id}').status_code == 200
    assert client.delete(f'/api/game/{game_id}').status_code == 404


def test_invalid_route_type(client):
    response = client.post('/api/new_game', json={'route': 5})
    assert response.status_code == 400


def test_health(client):
    new_game(client)
    data = client.get('/api/health').get_json()
    assert data['status'] == 'healthy'
    assert data['active_games'] == 1
    assert data['catalog']['total_words'] == 6


def test_missing_game_service(client, monkeypatch):
    monkeypatch.setattr(game_service_module, '_game_service', None)
    response = client.post('/api/new_game', json={})
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Game service unavailable'
