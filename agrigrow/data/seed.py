# agrigrow/data/seed.py
from decimal import Decimal

from agrigrow.data.database import SessionLocal
from agrigrow.data.models.product import ProductModel
from agrigrow.repos.product_repo import ProductRepo
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {"name": "Organic Potting Soil 20L", "type": "Soil", "price": Decimal("349.00"), "stock": 120,
     "brand": "GreenRoot", "sku": "SOIL-020", "rating": 4.5,
     "description": "Ready-to-use potting mix enriched with compost and cocopeat."},
    {"name": "Vermicompost 5kg", "type": "Soil", "price": Decimal("199.00"), "stock": 80,
     "brand": "EarthWorks", "sku": "SOIL-VC5", "rating": 4.6,
     "description": "Slow-release worm castings for vegetables and flowering plants."},
    {"name": "NPK 19-19-19 Water Soluble 1kg", "type": "Nutrients", "price": Decimal("289.00"), "stock": 60,
     "brand": "KrishiPlus", "sku": "NUT-NPK1", "rating": 4.3,
     "description": "Balanced fertilizer for foliar spray and fertigation."},
    {"name": "Seaweed Extract 500ml", "type": "Nutrients", "price": Decimal("259.00"), "stock": 45,
     "brand": "OceanGrow", "sku": "NUT-SW500", "rating": 4.4,
     "description": "Growth stimulant rich in micronutrients."},
    {"name": "Pruning Shears", "type": "Tools", "price": Decimal("449.00"), "stock": 35,
     "brand": "FieldPro", "sku": "TOOL-PS1", "rating": 4.7,
     "description": "Carbon steel bypass pruner with safety lock."},
    {"name": "Garden Trowel Set", "type": "Tools", "price": Decimal("299.00"), "stock": 50,
     "brand": "FieldPro", "sku": "TOOL-TS3", "rating": 4.2,
     "description": "Three-piece hand tool set with rubber grips."},
    {"name": "Drip Irrigation Kit (50 plants)", "type": "Irrigation", "price": Decimal("1299.00"), "stock": 20,
     "brand": "AquaLine", "sku": "IRR-DK50", "rating": 4.5,
     "description": "Complete drip kit with timer-ready connector and emitters."},
    {"name": "Garden Hose 15m", "type": "Irrigation", "price": Decimal("899.00"), "stock": 25,
     "brand": "AquaLine", "sku": "IRR-GH15", "rating": 4.1,
     "description": "Kink-resistant hose with spray nozzle."},
]


def seed(db=None) -> int:
    """Insert the demo catalog when the product table is empty. Returns the number inserted."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        repo = ProductRepo(db)
        # not forcing: only seed if empty
        if repo.count_products() > 0:
            logger.info("Catalog already has products, skipping seed")
            return 0
        for data in DEMO_PRODUCTS:
            db.add(ProductModel(**data))
        repo.commit()
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
        return len(DEMO_PRODUCTS)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    from agrigrow.main import init_db

    init_db()
    seed()
