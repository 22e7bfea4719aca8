"""
Pytest fixtures for Warebnb backend tests.

Provides test database setup, two-company tenant fixtures, and test client.
"""

from datetime import timedelta

import pytest

from warebnb import create_app
from warebnb.config import TestConfig
from warebnb.extensions import db
from warebnb.models import Booking, Company, Warehouse, WarehouseService
from warebnb.services.auth_service import create_profile
from warebnb.time_utils import today


PASSWORD = "Password123!"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TestConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        db.session.rollback()


@pytest.fixture(scope='function')
def company_a(db_session):
    """Company A (first tenant)."""
    company = Company(name="Acme Storage", city="Istanbul")
    db_session.add(company)
    db_session.commit()
    return company


@pytest.fixture(scope='function')
def company_b(db_session):
    """Company B (second tenant)."""
    company = Company(name="Beta Logistics", city="Izmir")
    db_session.add(company)
    db_session.commit()
    return company


@pytest.fixture(scope='function')
def warehouse_a(db_session, company_a):
    warehouse = Warehouse(
        company_id=company_a.id,
        name="Acme North",
        city="Istanbul",
        total_sq_ft=200000,
        total_pallet_capacity=500,
    )
    db_session.add(warehouse)
    db_session.commit()
    return warehouse


@pytest.fixture(scope='function')
def warehouse_b(db_session, company_b):
    warehouse = Warehouse(
        company_id=company_b.id,
        name="Beta Port",
        city="Izmir",
        total_sq_ft=100000,
        total_pallet_capacity=100,
    )
    db_session.add(warehouse)
    db_session.commit()
    return warehouse


@pytest.fixture(scope='function')
def service_a(db_session, warehouse_a):
    """Labelling service offered by warehouse A."""
    service = WarehouseService(
        warehouse_id=warehouse_a.id,
        code="LABEL",
        name="Labelling",
        unit_type="per-item",
        base_price_cents=250,
        min_quantity=10,
    )
    db_session.add(service)
    db_session.commit()
    return service


@pytest.fixture(scope='function')
def root_user(db_session):
    return create_profile("root@warebnb.test", PASSWORD, name="Root", role="root")


@pytest.fixture(scope='function')
def admin_a(db_session, company_a):
    return create_profile(
        "admin@acme.test", PASSWORD, name="Acme Admin",
        role="warehouse_admin", company_id=company_a.id,
    )


@pytest.fixture(scope='function')
def staff_a(db_session, company_a):
    return create_profile(
        "staff@acme.test", PASSWORD, name="Acme Staff",
        role="warehouse_staff", company_id=company_a.id,
    )


@pytest.fixture(scope='function')
def admin_b(db_session, company_b):
    return create_profile(
        "admin@beta.test", PASSWORD, name="Beta Admin",
        role="warehouse_admin", company_id=company_b.id,
    )


@pytest.fixture(scope='function')
def client_user(db_session):
    """Warehouse client (customer)."""
    return create_profile("client@example.test", PASSWORD, name="Carla Client")


@pytest.fixture(scope='function')
def other_client(db_session):
    return create_profile("other@example.test", PASSWORD, name="Oscar Other")


@pytest.fixture(scope='function')
def broker(db_session):
    return create_profile("broker@example.test", PASSWORD, role="warehouse_broker")


@pytest.fixture(scope='function')
def booking_a(db_session, client_user, warehouse_a):
    """Pending pallet booking by client_user at warehouse A."""
    start = today() + timedelta(days=7)
    booking = Booking(
        customer_id=client_user.id,
        warehouse_id=warehouse_a.id,
        type="pallet",
        status="pending",
        pallet_count=10,
        start_date=start,
        end_date=start + timedelta(days=30),
        months=1,
        total_amount_cents=22500,
    )
    db_session.add(booking)
    db_session.commit()
    return booking


@pytest.fixture(scope='function')
def booking_b(db_session, other_client, warehouse_b):
    """Booking by other_client at warehouse B."""
    start = today() + timedelta(days=7)
    booking = Booking(
        customer_id=other_client.id,
        warehouse_id=warehouse_b.id,
        type="pallet",
        status="confirmed",
        pallet_count=5,
        start_date=start,
        end_date=start + timedelta(days=30),
        months=1,
        total_amount_cents=11250,
    )
    db_session.add(booking)
    db_session.commit()
    return booking


def future(days: int = 7) -> str:
    """ISO date a number of days from today."""
    return (today() + timedelta(days=days)).isoformat()


def get_auth_token(client, email: str, password: str = PASSWORD) -> str:
    """Helper to get auth token for a profile."""
    response = client.post('/api/v1/auth/login', json={
        'email': email,
        'password': password
    })
    if response.status_code == 200:
        return response.get_json()['data']['token']
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


def login_headers(client, profile) -> dict:
    return auth_headers(get_auth_token(client, profile.email))


@pytest.fixture(scope='function')
def root_headers(client, root_user):
    return login_headers(client, root_user)


@pytest.fixture(scope='function')
def admin_headers(client, admin_a):
    return login_headers(client, admin_a)


@pytest.fixture(scope='function')
def staff_headers(client, staff_a):
    return login_headers(client, staff_a)


@pytest.fixture(scope='function')
def admin_b_headers(client, admin_b):
    return login_headers(client, admin_b)


@pytest.fixture(scope='function')
def client_headers(client, client_user):
    return login_headers(client, client_user)


@pytest.fixture(scope='function')
def other_client_headers(client, other_client):
    return login_headers(client, other_client)


@pytest.fixture(scope='function')
def broker_headers(client, broker):
    return login_headers(client, broker)
