# Overview: Flask CLI command group for bootstrap and maintenance.

# backend/warebnb/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to "warebnb:create_app".
# - Use: python -m flask warebnb <command> [options]
#
# - python -m flask warebnb init-db
#   Create all tables that do not exist yet (use "flask db upgrade" for migrations).
# - python -m flask warebnb create-profile --email root@warebnb.local --password "Password123!" --role root
#   Create a profile (prompts if options are omitted).
# - python -m flask warebnb seed-demo
#   Demo company, warehouse, price lists, services and one profile per role.
# - python -m flask warebnb cleanup-sessions
#   Delete expired and revoked session tokens.

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .models import Company, Profile, Warehouse, WarehousePricing, WarehouseService
from .permissions.roles import ALL_ROLES, DEFAULT_ROLE, ROOT, WAREHOUSE_ADMIN, WAREHOUSE_STAFF, WAREHOUSE_SUPERVISOR
from .services.auth_service import create_profile, PasswordValidationError
from .services import session_service
from .validation import ConflictError, ValidationError


DEMO_PASSWORD = "Password123!"


@click.group("warebnb")
def warebnb_group():
    """Warebnb bootstrap and maintenance commands."""


@warebnb_group.command("init-db")
@with_appcontext
def init_db():
    db.create_all()
    click.echo("PASS Tables created")


@warebnb_group.command("create-profile")
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--name", default=None)
@click.option("--role", type=click.Choice(ALL_ROLES), default=DEFAULT_ROLE, show_default=True)
@click.option("--company-id", type=int, default=None)
@with_appcontext
def create_profile_cli(email, password, name, role, company_id):
    """Create a profile with any role (signup only creates clients)."""
    try:
        profile = create_profile(
            email=email,
            password=password,
            name=name,
            role=role,
            company_id=company_id,
        )
    except (PasswordValidationError, ValidationError, ConflictError) as e:
        raise click.ClickException(str(e))

    click.echo(f"PASS Created profile {profile.email} (ID: {profile.id}, role: {profile.role})")


@warebnb_group.command("seed-demo")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@with_appcontext
def seed_demo(yes):
    """
    Seed demo data: one company with a warehouse, price lists, two add-on
    services and one profile per role. Idempotent on profile email.

    All passwords default to: "Password123!"
    """
    if not current_app.config.get("DEMO_SEED_ENABLED") and not yes:
        click.confirm("WARN DEMO_SEED_ENABLED is off. Seed demo data anyway?", abort=True)

    company = db.session.query(Company).filter_by(name="Demo Logistics").first()
    if not company:
        company = Company(name="Demo Logistics", city="Istanbul", country="TR", vat_number="TR1234567890")
        db.session.add(company)
        db.session.flush()
        click.echo(f"PASS Created company: {company.name} (ID: {company.id})")

    warehouse = db.session.query(Warehouse).filter_by(company_id=company.id).first()
    if not warehouse:
        warehouse = Warehouse(
            company_id=company.id,
            name="Demo Warehouse North",
            address="1 Depot Road",
            city="Istanbul",
            total_sq_ft=250000,
            total_pallet_capacity=2000,
            min_area_sq_ft=40000,
            is_active=True,
        )
        db.session.add(warehouse)
        db.session.flush()
        db.session.add_all([
            WarehousePricing(
                warehouse_id=warehouse.id,
                pricing_type="pallet",
                base_price_cents=1750,
                unit="per_pallet_per_month",
                volume_discounts={"50": 10, "100": 15, "250": 20},
            ),
            WarehousePricing(
                warehouse_id=warehouse.id,
                pricing_type="area",
                base_price_cents=2000,
                unit="per_sqft_per_year",
                min_quantity=40000,
            ),
            WarehouseService(
                warehouse_id=warehouse.id,
                code="LABEL",
                name="Pallet labelling",
                category="handling",
                unit_type="per-pallet",
                base_price_cents=250,
                min_quantity=1,
            ),
            WarehouseService(
                warehouse_id=warehouse.id,
                code="SHRINK",
                name="Shrink wrapping",
                category="packaging",
                unit_type="per-pallet",
                base_price_cents=400,
                min_quantity=10,
            ),
        ])
        click.echo(f"PASS Created warehouse: {warehouse.name} (ID: {warehouse.id})")
    db.session.commit()

    operator_roles = {WAREHOUSE_ADMIN, WAREHOUSE_SUPERVISOR, WAREHOUSE_STAFF}
    for role in ALL_ROLES:
        email = f"{role.replace('_', '.')}@warebnb.local"
        if db.session.query(Profile).filter_by(email=email).first():
            click.echo(f"SKIP {email} already exists")
            continue
        profile = create_profile(
            email=email,
            password=DEMO_PASSWORD,
            name=role.replace("_", " ").title(),
            role=role,
            company_id=company.id if role in operator_roles else None,
        )
        click.echo(f"PASS Created {profile.email} ({role})")

    click.echo(f"\nDONE Demo data ready. Root login: {ROOT}@warebnb.local / {DEMO_PASSWORD}")


@warebnb_group.command("cleanup-sessions")
@with_appcontext
def cleanup_sessions():
    deleted = session_service.cleanup_expired_sessions()
    click.echo(f"Deleted {deleted} expired or revoked sessions.")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(warebnb_group)
