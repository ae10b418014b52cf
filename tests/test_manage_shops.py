import responses

from scripts import manage_shops
from tests.conftest import TEST_SHOP


def test_list(installed_shop, capsys):
    assert manage_shops.main(["list"]) == 0
    assert TEST_SHOP in capsys.readouterr().out


def test_remove(installed_shop, token_store):
    assert manage_shops.main(["remove", "--shop", f"https://{TEST_SHOP}/"]) == 0
    assert token_store.get_all_shops() == []


def test_remove_rejects_invalid_domain():
    assert manage_shops.main(["remove", "--shop", "foo.example.com"]) == 1


@responses.activate
def test_verify(installed_shop, capsys):
    responses.add(
        responses.POST,
        f"https://{TEST_SHOP}/admin/api/2025-01/graphql.json",
        json={"data": {"shop": {"name": "Demo Store"}}}
    )

    assert manage_shops.main(["verify", "--shop", TEST_SHOP]) == 0
    assert "Demo Store" in capsys.readouterr().out


def test_verify_without_token():
    assert manage_shops.main(["verify", "--shop", TEST_SHOP]) == 1
