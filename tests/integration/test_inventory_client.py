import pytest

from clients.inventory_client import InventoryClient, InventoryClientError


@pytest.fixture
def api(client):
    return InventoryClient("http://testserver", session=client)


def test_client_crud_flow(api, product_payload):
    created = api.create_product(product_payload())
    assert api.get_product(created["id"])["code"] == created["code"]
    assert [p["id"] for p in api.list_products("ok")] == [created["id"]]
    assert api.list_products("vencido") == []

    updated = api.update_product(created["id"], {"quantity": 9})
    assert updated["quantity"] == 9

    pdf = api.download_proforma(created["brand"])
    assert pdf.startswith(b"%PDF-")

    api.delete_product(created["id"])
    with pytest.raises(InventoryClientError) as err:
        api.get_product(created["id"])
    assert err.value.status_code == 404


def test_client_surfaces_conflict(api, product_payload):
    api.create_product(product_payload())
    with pytest.raises(InventoryClientError) as err:
        api.create_product(product_payload())
    assert err.value.status_code == 409
    assert "Duplicate" in err.value.detail
