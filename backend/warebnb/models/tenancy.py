from __future__ import annotations

from ..extensions import db
from warebnb.time_utils import to_utc_z


class Company(db.Model):
    """
    Tenant boundary for warehouse operators.

    Warehouses belong to a company; admin, supervisor and staff profiles
    with company_id see bookings, orders and logs for those warehouses.
    Clients may also carry a company for branding only.
    """
    __tablename__ = "companies"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    logo_url = db.Column(db.String(512), nullable=True)

    address_line = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(128), nullable=True)
    postal_code = db.Column(db.String(32), nullable=True)
    country = db.Column(db.String(64), nullable=True)
    vat_number = db.Column(db.String(64), nullable=True)

    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "logo_url": self.logo_url,
            "address_line": self.address_line,
            "city": self.city,
            "postal_code": self.postal_code,
            "country": self.country,
            "vat_number": self.vat_number,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class Warehouse(db.Model):
    """
    A physical warehouse listed on the marketplace.

    Capacity columns are optional; a NULL capacity is not enforced.
    """
    __tablename__ = "warehouses"
    __table_args__ = (
        db.Index("ix_warehouses_company_active", "company_id", "is_active"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.Integer, db.ForeignKey("companies.id"), nullable=True, index=True)

    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(128), nullable=True)

    total_sq_ft = db.Column(db.Integer, nullable=True)
    total_pallet_capacity = db.Column(db.Integer, nullable=True)
    # Minimum space for area rentals at this warehouse
    min_area_sq_ft = db.Column(db.Integer, nullable=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    company = db.relationship("Company", backref=db.backref("warehouses", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_id": self.company_id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "total_sq_ft": self.total_sq_ft,
            "total_pallet_capacity": self.total_pallet_capacity,
            "min_area_sq_ft": self.min_area_sq_ft,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
        }


class WarehousePricing(db.Model):
    """
    Warehouse-specific price list that overrides the platform defaults.

    pricing_type: pallet | area
    unit: per_pallet_per_month | per_sqft_per_month | per_sqft_per_year
    volume_discounts: {"<pallet threshold>": <percent>}
    """
    __tablename__ = "warehouse_pricing"
    __table_args__ = (
        db.UniqueConstraint("warehouse_id", "pricing_type", name="uq_warehouse_pricing_type"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=False, index=True)
    pricing_type = db.Column(db.String(16), nullable=False)
    base_price_cents = db.Column(db.Integer, nullable=False)
    unit = db.Column(db.String(32), nullable=False)
    min_quantity = db.Column(db.Integer, nullable=True)
    volume_discounts = db.Column(db.JSON, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    warehouse = db.relationship("Warehouse", backref=db.backref("pricing", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "warehouse_id": self.warehouse_id,
            "pricing_type": self.pricing_type,
            "base_price_cents": self.base_price_cents,
            "unit": self.unit,
            "min_quantity": self.min_quantity,
            "volume_discounts": self.volume_discounts or {},
            "is_active": self.is_active,
            "updated_at": to_utc_z(self.updated_at),
        }


class WarehouseService(db.Model):
    """Billable add-on service offered by a warehouse (labelling, cross-docking, ...)."""
    __tablename__ = "warehouse_services"
    __table_args__ = (
        db.UniqueConstraint("warehouse_id", "code", name="uq_warehouse_services_code"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=False, index=True)
    code = db.Column(db.String(64), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(64), nullable=True)
    # per-item | per-pallet | per-hour | per-order | flat-rate
    unit_type = db.Column(db.String(32), nullable=False, default="per-item")
    base_price_cents = db.Column(db.Integer, nullable=False)
    min_quantity = db.Column(db.Integer, nullable=False, default=1)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    warehouse = db.relationship("Warehouse", backref=db.backref("services", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "warehouse_id": self.warehouse_id,
            "code": self.code,
            "name": self.name,
            "category": self.category,
            "unit_type": self.unit_type,
            "base_price_cents": self.base_price_cents,
            "min_quantity": self.min_quantity,
            "is_active": self.is_active,
        }
