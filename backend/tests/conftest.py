"""
Pytest fixtures for StitchFlow backend tests.

Provides an in-memory database per test, an app context for service
tests, and test clients signed in as the seeded owner and tailor.
"""

import pytest

from stitchflow import create_app
from stitchflow.extensions import db
from stitchflow.services.state_service import AppState


@pytest.fixture(scope='function')
def app():
    """Create application for testing against a fresh in-memory database."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'ADVISORY_API_KEY': '',
    })
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def ctx(app):
    """App context for calling services directly."""
    with app.app_context():
        yield
        db.session.remove()


@pytest.fixture(scope='function')
def state(ctx):
    """Hydrated application state (seed values on an empty database)."""
    return AppState.load()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


def _login(client, username):
    resp = client.post('/api/auth/login', json={'username': username})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture(scope='function')
def owner_client(client):
    """Client signed in as the seeded owner (admin)."""
    return _login(client, 'admin')


@pytest.fixture(scope='function')
def tailor_client(client):
    """Client signed in as the seeded tailor (john)."""
    return _login(client, 'john')


@pytest.fixture(scope='function')
def measured_customer(owner_client):
    """A customer with a Shirt measurement on file, created through the API."""
    customer = owner_client.post(
        '/api/customers', json={'name': 'Asha Verma', 'phone': '9876543210'}
    ).get_json()
    owner_client.post('/api/measurements', json={
        'customer_id': customer['id'],
        'type': 'Shirt',
        'details': {'Chest': '40', 'Collar': '15.5'},
    })
    return customer
