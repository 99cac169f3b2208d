"""Tests for production API endpoints."""
import uuid
from datetime import datetime, timedelta

import pytest

from kimi_kitchen.models.production import Production, ProductionCost


@pytest.fixture
def priced_parippu_vada(parippu_vada, purchase_factory):
    recipe, chana_dal, stock = parippu_vada
    purchase_factory(chana_dal, quantity=5, unit_price=100, purchased_at=datetime.utcnow() - timedelta(days=1))
    return recipe, chana_dal, stock


class TestCreateProduction:
    def test_costs_and_consumes_stock(self, client, headers, priced_parippu_vada):
        """Two batches at 0.4 kg each consume 0.8 kg and cost 80."""
        recipe, chana_dal, _ = priced_parippu_vada
        payload = {
            "recipe_id": str(recipe.id),
            "quantity": 2,
            "labour_cost": 180,
            "overhead_cost": 45,
            "packaging_cost": 20,
        }
        response = client.post("/api/production", json=payload, headers=headers)
        assert response.status_code == 201
        data = response.json()
        assert data["recipe"]["name"] == "Parippu Vada"
        cost = data["production_cost"]
        assert cost["ingredient_cost"] == pytest.approx(80)
        assert cost["total_production_cost"] == pytest.approx(80 + 180 + 45 + 20)

        stock = client.get("/api/stock", headers=headers).json()["stock"]
        assert stock[0]["quantity"] == pytest.approx(0.2)

    def test_insufficient_stock_writes_nothing(self, client, headers, db, priced_parippu_vada):
        recipe, _, _ = priced_parippu_vada
        payload = {"recipe_id": str(recipe.id), "quantity": 3}

        response = client.post("/api/production", json=payload, headers=headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Insufficient stock for Chana Dal"}

        assert db.query(Production).count() == 0
        assert db.query(ProductionCost).count() == 0
        stock = client.get("/api/stock", headers=headers).json()["stock"]
        assert stock[0]["quantity"] == pytest.approx(1.0)

    def test_extra_costs_default_to_zero(self, client, headers, priced_parippu_vada):
        recipe, _, _ = priced_parippu_vada
        payload = {"recipe_id": str(recipe.id), "quantity": 1}
        response = client.post("/api/production", json=payload, headers=headers)
        assert response.status_code == 201
        cost = response.json()["production_cost"]
        assert cost["labour_cost"] == 0
        assert cost["total_production_cost"] == pytest.approx(40)

    def test_unknown_recipe(self, client, headers):
        payload = {"recipe_id": str(uuid.uuid4()), "quantity": 1}
        response = client.post("/api/production", json=payload, headers=headers)
        assert response.status_code == 404

    @pytest.mark.parametrize("field,value", [
        ("quantity", 0),
        ("labour_cost", -1),
    ])
    def test_invalid_payload(self, client, headers, parippu_vada, field, value):
        recipe, _, _ = parippu_vada
        payload = {"recipe_id": str(recipe.id), "quantity": 1, field: value}
        response = client.post("/api/production", json=payload, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_requires_session(self, client, parippu_vada):
        recipe, _, _ = parippu_vada
        response = client.post("/api/production", json={"recipe_id": str(recipe.id), "quantity": 1})
        assert response.status_code == 401


class TestListProductions:
    def test_list(self, client, headers, priced_parippu_vada):
        recipe, _, _ = priced_parippu_vada
        client.post("/api/production", json={"recipe_id": str(recipe.id), "quantity": 1}, headers=headers)

        response = client.get("/api/production", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["productions"][0]["recipe"]["name"] == "Parippu Vada"
        assert data["productions"][0]["production_cost"]["ingredient_cost"] == pytest.approx(40)
