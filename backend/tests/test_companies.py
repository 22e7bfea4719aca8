"""
Company profile and warehouse administration tests.
"""


class TestMyCompany:

    def test_get_own_company(self, client, db_session, staff_headers, company_a):
        resp = client.get("/api/v1/companies/me", headers=staff_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["name"] == "Acme Storage"

    def test_client_without_company(self, client, db_session, client_headers):
        resp = client.get("/api/v1/companies/me", headers=client_headers)
        assert resp.status_code == 404

    def test_admin_updates_company(self, client, db_session, admin_headers):
        resp = client.patch("/api/v1/companies/me", json={
            "name": "Acme Storage Group",
            "vat_number": "TR 1234567890",
        }, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["name"] == "Acme Storage Group"

    def test_blank_name_rejected(self, client, db_session, admin_headers):
        resp = client.patch("/api/v1/companies/me", json={"name": ""}, headers=admin_headers)
        assert resp.status_code == 400

    def test_bad_vat_rejected(self, client, db_session, admin_headers):
        resp = client.patch("/api/v1/companies/me", json={"vat_number": "TR-12/34"}, headers=admin_headers)
        assert resp.status_code == 400

    def test_root_creates_company(self, client, db_session, root_headers):
        resp = client.post("/api/v1/companies", json={"name": "Gamma Depot", "city": "Ankara"}, headers=root_headers)
        assert resp.status_code == 201
        assert resp.get_json()["data"]["city"] == "Ankara"


class TestWarehouseAdmin:

    def test_admin_creates_warehouse_for_own_company(self, client, db_session, admin_headers, company_a, company_b):
        resp = client.post("/api/v1/warehouses", json={
            "name": "Acme South",
            "city": "Bursa",
            "total_pallet_capacity": 300,
            "company_id": company_b.id,
        }, headers=admin_headers)
        assert resp.status_code == 201
        assert resp.get_json()["data"]["company_id"] == company_a.id

    def test_negative_capacity_rejected(self, client, db_session, admin_headers):
        resp = client.post("/api/v1/warehouses", json={
            "name": "Acme South", "city": "Bursa", "total_sq_ft": -1,
        }, headers=admin_headers)
        assert resp.status_code == 400

    def test_warehouse_detail_has_availability(self, client, db_session, client_headers, warehouse_b, booking_b):
        resp = client.get(f"/api/v1/warehouses/{warehouse_b.id}", headers=client_headers)
        data = resp.get_json()["data"]
        assert data["available_pallets"] == 95
        assert data["available_sq_ft"] == 100000

    def test_city_filter(self, client, db_session, client_headers, warehouse_a, warehouse_b):
        resp = client.get("/api/v1/warehouses?city=izmir", headers=client_headers)
        assert [w["id"] for w in resp.get_json()["data"]] == [warehouse_b.id]

    def test_set_pricing(self, client, db_session, admin_headers, warehouse_a):
        resp = client.put(f"/api/v1/warehouses/{warehouse_a.id}/pricing", json={
            "pricing_type": "pallet",
            "base_price_cents": 1800,
            "unit": "per_pallet_per_month",
            "volume_discounts": {"100": 12.5},
        }, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["volume_discounts"] == {"100": 12.5}

        resp = client.put(f"/api/v1/warehouses/{warehouse_a.id}/pricing", json={
            "pricing_type": "pallet",
            "base_price_cents": 1900,
            "unit": "per_pallet_per_month",
        }, headers=admin_headers)
        pricing = client.get(f"/api/v1/warehouses/{warehouse_a.id}/pricing", headers=admin_headers).get_json()["data"]
        assert [p["base_price_cents"] for p in pricing] == [1900]

    def test_pricing_unit_must_match_type(self, client, db_session, admin_headers, warehouse_a):
        resp = client.put(f"/api/v1/warehouses/{warehouse_a.id}/pricing", json={
            "pricing_type": "area",
            "base_price_cents": 100,
            "unit": "per_pallet_per_month",
        }, headers=admin_headers)
        assert resp.status_code == 400

    def test_bad_volume_discount(self, client, db_session, admin_headers, warehouse_a):
        resp = client.put(f"/api/v1/warehouses/{warehouse_a.id}/pricing", json={
            "pricing_type": "pallet",
            "base_price_cents": 100,
            "unit": "per_pallet_per_month",
            "volume_discounts": {"50": 150},
        }, headers=admin_headers)
        assert resp.status_code == 400

    def test_create_service(self, client, db_session, admin_headers, warehouse_a):
        payload = {"code": "SHRINK", "name": "Shrink wrap", "base_price_cents": 400, "min_quantity": 10}
        resp = client.post(f"/api/v1/warehouses/{warehouse_a.id}/services", json=payload, headers=admin_headers)
        assert resp.status_code == 201

        resp = client.post(f"/api/v1/warehouses/{warehouse_a.id}/services", json=payload, headers=admin_headers)
        assert resp.status_code == 409

    def test_inactive_services_hidden(self, client, db_session, client_headers, service_a, warehouse_a):
        service_a.is_active = False
        db_session.commit()

        resp = client.get(f"/api/v1/warehouses/{warehouse_a.id}/services", headers=client_headers)
        assert resp.get_json()["data"] == []
        resp = client.get(
            f"/api/v1/warehouses/{warehouse_a.id}/services?include_inactive=true",
            headers=client_headers,
        )
        assert len(resp.get_json()["data"]) == 1
