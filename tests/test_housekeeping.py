from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from storefront_cart.data.models.cart import CartStatus
from storefront_cart.data.models.product import ProductModel
from storefront_cart.data.seed import DEMO_PRODUCTS, seed
from storefront_cart.repos.cart_repo import CartRepo
from storefront_cart.repos.product_repo import ProductRepo
from storefront_cart.tasks.abandon import abandon_stale_carts


def _cart_idle_for(db, user_id, days):
    repo = CartRepo(db)
    cart, _ = repo.get_or_create_active_cart(user_id)
    cart.updated_at = datetime.now(timezone.utc) - timedelta(days=days)
    repo.commit()
    return cart


class TestAbandonStaleCarts:
    def test_only_idle_active_carts_are_abandoned(self, db):
        stale = _cart_idle_for(db, "idle-user", days=10)
        fresh = _cart_idle_for(db, "busy-user", days=0)

        count = abandon_stale_carts(db, idle_seconds=7 * 24 * 60 * 60)

        assert count == 1
        db.expire_all()
        repo = CartRepo(db)
        assert repo.get_cart(stale.id).status == CartStatus.ABANDONED.value
        assert repo.get_cart(fresh.id).status == CartStatus.ACTIVE.value
        db.commit()

    def test_abandoned_user_gets_a_new_active_cart(self, db, cart_service):
        stale = _cart_idle_for(db, "returning-user", days=30)
        abandon_stale_carts(db, idle_seconds=60)

        cart = cart_service.get_or_create_active_cart("returning-user")

        assert cart.id != stale.id
        assert cart.status == CartStatus.ACTIVE.value

    def test_cart_activity_resets_idle_clock(self, db, cart_service, make_product):
        product = make_product()
        stale = _cart_idle_for(db, "shopper", days=30)
        cart_service.add_item("shopper", product.id, 1)

        count = abandon_stale_carts(db, idle_seconds=24 * 60 * 60)

        assert count == 0
        assert cart_service.get_or_create_active_cart("shopper").id == stale.id


class TestSeed:
    def test_seed_is_idempotent(self, db):
        assert seed(db) == len(DEMO_PRODUCTS)
        assert seed(db) == 0
        assert ProductRepo(db).count() == len(DEMO_PRODUCTS)
        db.commit()

    def test_seeded_products_are_addable(self, db, cart_service):
        seed(db)
        keyboard = db.execute(
            select(ProductModel).where(ProductModel.slug == "mechanical-keyboard")
        ).scalar_one()
        db.commit()

        cart = cart_service.add_item("user-1", keyboard.id, 2)

        assert cart.items[0].price_snapshot_cents == 2499
        assert cart.items[0].product.image_url == "/images/mechanical-keyboard.jpg"
