"""
End-to-end tests: client app against the in-process API
"""

import httpx
import pytest

from shopcart.client.app import ShopApp
from shopcart.client.errors import Conflict, NotFound, Unauthorized, ValidationFailed
from shopcart.core.session.store import SESSION_KEY


@pytest.mark.asyncio
class TestAuthFlow:

    async def test_register_twice_conflicts(self, shop):
        profile = await shop.api.register("A", "a@x.com", "p")
        assert profile.email == "a@x.com"

        with pytest.raises(Conflict) as exc:
            await shop.api.register("A", "a@x.com", "p")
        assert exc.value.message == "Email already registered"

    async def test_register_feedback(self, shop):
        first = await shop.register("A", "a@x.com", "p")
        second = await shop.register("A", "a@x.com", "p")

        assert first.ok and first.message == "Account created. You can sign in now."
        assert not second.ok and second.message == "Email already registered"

    async def test_register_missing_field_skips_network(self, storage):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={})

        app = ShopApp(storage, base_url="http://api.test", transport=httpx.MockTransport(handler))
        with pytest.raises(ValidationFailed):
            await app.api.register("A", "  ", "p")
        assert calls == []

    async def test_login_wrong_password_leaves_session_untouched(self, shop, storage):
        await shop.api.register("A", "a@x.com", "p")

        with pytest.raises(Unauthorized):
            await shop.api.login("a@x.com", "wrong")

        assert storage.get(SESSION_KEY) is None
        assert shop.session_store.get_token() is None

    async def test_sign_in_failure_is_feedback(self, shop):
        feedback = await shop.sign_in("ghost@x.com", "p")
        assert not feedback.ok
        assert feedback.message == "Invalid credentials"
        assert shop.auth_label() == "Sign In"

    async def test_sign_in_stores_session_and_notifies(self, shop):
        await shop.api.register("Ada Lovelace", "ada@x.com", "secret")
        events = []
        shop.subscribe("session", events.append)

        feedback = await shop.sign_in(" ada@x.com ", "secret")

        assert feedback.ok
        assert shop.session_store.get_token()
        assert shop.session_store.get_profile().email == "ada@x.com"
        assert shop.auth_label() == "Ada"
        assert len(events) == 1 and events[0].is_authenticated

    async def test_profile_uses_bearer_token(self, shop):
        await shop.api.register("A", "a@x.com", "p")
        await shop.api.login("a@x.com", "p")

        profile = await shop.api.profile()
        assert profile.email == "a@x.com"

    async def test_profile_without_token_makes_no_request(self, storage):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"user": {"id": "1", "name": "A", "email": "a@x.com"}})

        app = ShopApp(storage, base_url="http://api.test", transport=httpx.MockTransport(handler))
        with pytest.raises(Unauthorized):
            await app.api.profile()
        assert calls == []

    async def test_sign_out(self, shop):
        await shop.api.register("A", "a@x.com", "p")
        await shop.sign_in("a@x.com", "p")
        events = []
        shop.subscribe("session", events.append)

        shop.sign_out()

        assert shop.session_store.get_token() is None
        assert shop.session_store.get_profile() is None
        assert not events[0].is_authenticated
        with pytest.raises(Unauthorized):
            await shop.api.profile()


@pytest.mark.asyncio
class TestCatalogFlow:

    async def test_search_blank_query(self, shop):
        result = await shop.search("   ")
        assert result.products == []
        assert result.notice == "No Products Found"

    async def test_search_and_add_to_cart(self, shop):
        await shop.api.seed()

        result = await shop.search("echo")
        assert result.notice is None
        assert len(result.products) == 1

        shop.add_to_cart(result.products[0])
        shop.add_to_cart(result.products[0])
        summary = shop.cart_summary()
        assert summary["item_count"] == 2
        assert summary["subtotal_display"] == "$59.98"

    async def test_search_no_results(self, shop):
        await shop.api.seed()
        result = await shop.search("toaster")
        assert result.products == []
        assert result.notice == "No Products Found"

    async def test_search_failure_becomes_notice(self, storage):
        def handler(request):
            return httpx.Response(500, json={"message": "Search exploded"})

        app = ShopApp(storage, base_url="http://api.test", transport=httpx.MockTransport(handler))
        result = await app.search("echo")
        assert result.notice == "Search exploded"

    async def test_get_missing_product(self, shop):
        with pytest.raises(NotFound):
            await shop.api.get_product("missing")


class TestCartActions:
    """Cart actions persist and notify in one call."""

    def test_badge_follows_every_action(self, shop, storage, sample_product, other_product):
        badges = []
        shop.subscribe("cart", lambda count, cart: badges.append(count))

        shop.add_to_cart(sample_product)
        shop.add_to_cart(sample_product)
        shop.add_to_cart(other_product)
        shop.change_quantity("prod-1", -1)
        shop.remove_from_cart("prod-2")
        shop.remove_from_cart("prod-2")
        shop.change_quantity("prod-1", -1)

        assert badges == [1, 2, 3, 2, 1, 1, 0]
        assert shop.badge_count() == 0

    def test_cart_survives_new_app_instance(self, storage, sample_product):
        ShopApp(storage, base_url="http://api.test").add_to_cart(sample_product)

        again = ShopApp(storage, base_url="http://api.test")
        assert again.badge_count() == 1

    def test_clear_cart(self, shop, sample_product):
        shop.add_to_cart(sample_product)
        shop.clear_cart()
        summary = shop.cart_summary()
        assert summary["items"] == []
        assert summary["subtotal_display"] == "$0.00"
        assert summary["checkout_enabled"] is False

    def test_unsubscribe(self, shop, sample_product):
        seen = []
        unsubscribe = shop.subscribe("cart", lambda count, cart: seen.append(count))
        shop.add_to_cart(sample_product)
        unsubscribe()
        shop.add_to_cart(sample_product)
        assert seen == [1]

    def test_unsubscribe_twice(self, shop, sample_product):
        seen = []
        unsubscribe = shop.subscribe("cart", lambda count, cart: seen.append(count))
        unsubscribe()
        unsubscribe()
        shop.add_to_cart(sample_product)
        assert seen == []

    def test_unknown_topic(self, shop):
        with pytest.raises(ValueError):
            shop.subscribe("orders", print)

    def test_from_env_uses_file_storage(self, tmp_path, monkeypatch, sample_product):
        monkeypatch.delenv("REDIS_URL", raising=False)
        monkeypatch.setenv("SHOPCART_STATE_DIR", str(tmp_path))

        ShopApp.from_env().add_to_cart(sample_product)

        assert (tmp_path / "shopcart.cart.json").exists()
        assert ShopApp.from_env().badge_count() == 1
