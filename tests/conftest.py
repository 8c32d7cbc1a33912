import pytest
from werkzeug.security import generate_password_hash

from mentortests import create_app, models
from mentortests.extensions import db, socketio, live_channels
from mentortests.schemas import CreateTestRequest
from mentortests.services import CatalogService


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
    live_channels.clear()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(name, role, classname=None):
    user = models.User(
        name=name,
        email=f'{name.lower()}@example.com',
        password=generate_password_hash('secret123'),
        role=role,
        classname=classname,
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def mentor(app):
    return make_user('Mentor', 'mentor')


@pytest.fixture
def other_mentor(app):
    return make_user('Other', 'mentor')


@pytest.fixture
def student(app):
    return make_user('Student', 'student', classname='10A')


@pytest.fixture
def other_student(app):
    return make_user('Classmate', 'student', classname='10A')


@pytest.fixture
def sample_test(mentor):
    data = CreateTestRequest(
        title='Algebra basics',
        description='Linear equations',
        classname='10A',
        subjectname='Math',
        questions=[
            {'question': 'Solve x + 2 = 4'},
            {'question': 'Solve 2x = 10'},
            {'question': 'Explain what a variable is'},
        ],
    )
    return CatalogService.create_test(mentor.id, data)


@pytest.fixture
def login(client):
    """Put a user in the test client's session"""
    def _login(user):
        with client.session_transaction() as sess:
            sess['user_id'] = user.id
            sess['role'] = user.role
        return client
    return _login


@pytest.fixture
def user_factory(app):
    return make_user


@pytest.fixture
def socket_for(app):
    """Open a Socket.IO connection carrying the given user's login session"""
    opened = []

    def _connect(user=None, query_string=None):
        http_client = app.test_client()
        if user is not None:
            with http_client.session_transaction() as sess:
                sess['user_id'] = user.id
                sess['role'] = user.role
        socket_client = socketio.test_client(
            app, query_string=query_string, flask_test_client=http_client
        )
        opened.append(socket_client)
        return socket_client

    yield _connect

    for socket_client in opened:
        if socket_client.is_connected():
            socket_client.disconnect()
