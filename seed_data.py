from app.db.session import gateway, create_db_and_tables
from app.models.entity import CLIENT, COMPANY, PRODUCT

def seed_catalog():
    print("Creating database and tables...")
    create_db_and_tables()

    # Check if products already exist to avoid duplicates
    existing_products = gateway.fetch_all(PRODUCT.name)
    if existing_products:
        print(f"Database already contains {len(existing_products)} products. Skipping seed.")
        return

    print("Seeding initial catalog...")
    with gateway.transaction() as conn:
        company_id = gateway.insert(COMPANY, {
            "name": "Casa do Café",
            "email": "contato@casadocafe.example",
            "phone": "11 4002-8922",
        }, conn)

        products = [
            {"name": "Espresso Beans 1kg", "description": "Dark roast, whole beans.", "price": 89.90, "image": "espresso.jpg"},
            {"name": "Ground Coffee 500g", "description": "Medium roast, drip grind.", "price": 34.50, "image": "ground.jpg"},
            {"name": "Cold Brew Bottle", "description": "Ready to drink, 300ml.", "price": 14.00, "image": "coldbrew.jpg"},
            {"name": "Ceramic Mug", "description": "350ml, dishwasher safe.", "price": 29.00, "image": "mug.jpg"},
        ]
        for product in products:
            gateway.insert(PRODUCT, {**product, "idCompany": company_id}, conn)

        gateway.insert(CLIENT, {
            "name": "Demo Client",
            "email": "demo@example.com",
            "phone": "11 99999-0000",
            "city": "São Paulo",
        }, conn)

    print(f"Successfully seeded {len(products)} products!")

if __name__ == "__main__":
    seed_catalog()
