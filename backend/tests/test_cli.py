"""CLI command tests."""

from warebnb.models import Company, Profile, Warehouse, WarehousePricing
from warebnb.permissions.roles import ALL_ROLES


def test_seed_demo_is_idempotent(app, db_session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["warebnb", "seed-demo", "--yes"])
    assert result.exit_code == 0, result.output
    assert "DONE Demo data ready" in result.output

    result = runner.invoke(args=["warebnb", "seed-demo", "--yes"])
    assert result.exit_code == 0, result.output
    assert "SKIP root@warebnb.local already exists" in result.output

    db_session.expire_all()
    assert db_session.query(Company).count() == 1
    assert db_session.query(Warehouse).count() == 1
    assert db_session.query(WarehousePricing).count() == 2
    assert db_session.query(Profile).count() == len(ALL_ROLES)

    admin = db_session.query(Profile).filter_by(email="warehouse.admin@warebnb.local").one()
    assert admin.company_id is not None


def test_create_profile_command(app, db_session):
    runner = app.test_cli_runner()
    result = runner.invoke(args=[
        "warebnb", "create-profile",
        "--email", "Ops@Warebnb.Local",
        "--password", "Password123!",
        "--role", "warehouse_staff",
    ])
    assert result.exit_code == 0, result.output
    assert "role: warehouse_staff" in result.output

    result = runner.invoke(args=[
        "warebnb", "create-profile",
        "--email", "weak@warebnb.local",
        "--password", "short",
    ])
    assert result.exit_code != 0
