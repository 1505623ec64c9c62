"""End-to-end storefront flows across identity, catalogue and ordering."""

import asyncio
import base64

import pytest
from shared.storage import FileKeyValueStore

PNG = base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64).decode()

FORM = {
    "name": "Asha Verma",
    "email": "asha@example.com",
    "phone": "+91 98765 43210",
    "address": "12 Park Street, Kolkata 700016",
}


class TestSellToDelivery:
    def test_listed_product_is_ordered_and_shipped(self, client, storefront):
        # Seller lists a product
        client.post("/session/signup", json={"email": "seller@shop.test", "password": "secret12"})
        listed = client.post(
            "/seller/products",
            json={
                "name": "Wireless Mouse",
                "price": 24.5,
                "description": "Quiet clicks and a two year battery.",
                "category": "Accessories",
                "image": {"filename": "mouse.png", "content_type": "image/png", "data": PNG},
            },
        )
        assert listed.status_code == 201
        product_id = listed.json()["id"]
        assert client.post("/session/logout").json()["redirect"] == "/"

        # Shopper buys two
        client.post("/session/signup", json={"email": "asha@example.com", "password": "secret12"})
        client.post("/cart/items", json={"product_id": product_id, "quantity": 2})
        placed = client.post("/checkout", json=FORM)
        assert placed.status_code == 201
        order = placed.json()
        assert order["total"] == pytest.approx(49.0)
        assert [o["id"] for o in client.get("/orders/mine").json()] == [order["id"]]

        # Seller was told, then ships
        assert "Wireless Mouse (x2) - $49.00" in storefront.notifier.email.outbox[0]["body"]
        shipped = client.put(f"/orders/{order['id']}/shipped")
        assert shipped.json()["shipped"] is True

    def test_signing_out_hides_my_orders(self, client):
        client.post("/session/signup", json={"email": "asha@example.com", "password": "secret12"})
        client.post("/session/logout")

        assert client.get("/orders/mine").status_code == 401


class TestRestart:
    def _storefront(self, shared, tmp_path, settings):
        from storefront import Collaborators, Storefront

        return Storefront(
            Collaborators(
                object_store=shared.object_store,
                identity_provider=shared.identity_provider,
                local_store=FileKeyValueStore(tmp_path),
            ),
            settings,
        )

    def test_cart_survives_restart(self, collaborators, product_record, settings, tmp_path):
        collaborators.object_store.seed("products", [product_record(id="tv-1", name="OLED TV", price=999.99)])

        first = self._storefront(collaborators, tmp_path, settings)
        asyncio.run(first.start())
        first.cart.add_to_cart(first.catalogue.get("tv-1"), 2)
        first.close()

        second = self._storefront(collaborators, tmp_path, settings)
        asyncio.run(second.start())

        assert [(str(i.product_id), i.quantity) for i in second.cart.items] == [("tv-1", 2)]
        second.close()

    def test_orders_survive_restart(self, collaborators, settings, tmp_path, product_record):
        from ordering.checkout.checkout import CheckoutForm

        collaborators.object_store.seed("products", [product_record(id="tv-1", name="OLED TV")])
        collaborators.identity_provider.register("asha@example.com", "secret12")

        first = self._storefront(collaborators, tmp_path, settings)
        asyncio.run(first.start())
        asyncio.run(first.session.login("asha@example.com", "secret12"))
        first.cart.add_to_cart(first.catalogue.get("tv-1"))
        order = asyncio.run(
            first.checkout.place_order(
                CheckoutForm(
                    customer_name=FORM["name"],
                    customer_email=FORM["email"],
                    customer_phone=FORM["phone"],
                    delivery_address=FORM["address"],
                )
            )
        )
        first.close()

        second = self._storefront(collaborators, tmp_path, settings)
        asyncio.run(second.start())

        assert [str(o.id) for o in second.orders.list_orders()] == [str(order.id)]
        assert second.cart.items == []
        second.close()


class TestHealth:
    def test_health_reports_domains(self, collaborators, product_record, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["session"] == "Anonymous"
        assert set(body["domains"]) == {"identity", "catalogue", "ordering"}
        assert body["domains"]["catalogue"]["products"] == 0
