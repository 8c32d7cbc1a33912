"""
Tests for session authentication.
"""


def register(client, **overrides):
    body = {
        'name': 'Ada',
        'email': 'Ada@Example.com',
        'password': 'lovelace',
        'role': 'student',
        'classname': '10A',
    }
    body.update(overrides)
    return client.post('/auth/register', json=body)


class TestRegister:

    def test_register(self, client):
        response = register(client)

        assert response.status_code == 201
        user = response.get_json()['user']
        assert user['email'] == 'ada@example.com'
        assert user['role'] == 'student'
        assert 'password' not in user

    def test_duplicate_email(self, client):
        register(client)

        response = register(client, email='ada@example.com')

        assert response.status_code == 400
        assert response.get_json()['message'] == 'Email already registered'

    def test_unknown_role(self, client):
        response = register(client, role='admin')

        assert response.status_code == 400

    def test_short_password(self, client):
        response = register(client, password='123')

        assert response.status_code == 400
        assert 'password' in response.get_json()['message']


class TestLogin:

    def test_login_then_me(self, client):
        register(client)

        login = client.post('/auth/login', json={'email': 'ADA@example.com', 'password': 'lovelace'})
        assert login.status_code == 200

        me = client.get('/auth/me').get_json()
        assert me['user']['name'] == 'Ada'

    def test_wrong_password(self, client):
        register(client)

        response = client.post('/auth/login', json={'email': 'ada@example.com', 'password': 'nope'})

        assert response.status_code == 401
        assert response.get_json() == {'success': False, 'message': 'Invalid email or password'}

    def test_logout(self, client):
        register(client)
        client.post('/auth/login', json={'email': 'ada@example.com', 'password': 'lovelace'})

        assert client.post('/auth/logout').status_code == 200
        assert client.get('/auth/me').status_code == 401

    def test_session_for_deleted_user(self, login, student):
        client = login(student)
        with client.session_transaction() as sess:
            sess['user_id'] = 4040

        assert client.get('/auth/me').status_code == 401
