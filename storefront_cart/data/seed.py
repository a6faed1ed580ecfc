# storefront_cart/data/seed.py
from sqlalchemy.orm import Session

from storefront_cart.data.database import SessionLocal, init_db
from storefront_cart.data.models.product import InventoryModel, ProductImageModel, ProductModel
from storefront_cart.repos.product_repo import ProductRepo
from storefront_cart.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {"name": "Mechanical Keyboard", "slug": "mechanical-keyboard", "price_cents": 2499, "stock": 100},
    {"name": "Wireless Mouse", "slug": "wireless-mouse", "price_cents": 4950, "stock": 40},
    {"name": "27in Monitor", "slug": "27in-monitor", "price_cents": 89900, "stock": 5},
]


def seed(db: Session) -> int:
    # tylko gdy katalog jest pusty
    repo = ProductRepo(db)
    if repo.count():
        return 0

    for row in DEMO_PRODUCTS:
        repo.add_product(
            ProductModel(
                name=row["name"],
                slug=row["slug"],
                price_cents=row["price_cents"],
                inventory=InventoryModel(quantity=row["stock"]),
                images=[ProductImageModel(url=f"/images/{row['slug']}.jpg", sort_order=0)],
            )
        )
    db.commit()

    logger.info(f"Seeded {len(DEMO_PRODUCTS)} products")
    return len(DEMO_PRODUCTS)


if __name__ == "__main__":
    configure_logging()
    init_db()
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
