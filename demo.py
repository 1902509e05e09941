#!/usr/bin/env python
from bazar.client import StoreClient

def main():
    c = StoreClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    c.reset()

    # -----------------------------
    # Seed a category and products
    # -----------------------------
    print("\nCreating category...")
    shirts = c.create_category("Shirts")
    print(shirts)

    print("\nCreating products...")
    prod1 = c.create_product({
        "name": "Linen Shirt", "price": 20, "oldPrice": 35, "stock": 5,
        "categoryId": shirts["id"], "image": "https://example.com/linen.jpg",
        "description": "Breathable summer shirt", "isNew": True,
    })
    prod2 = c.create_product({
        "title": "Denim Jacket", "price": 60, "quantity": 2,
        "category": {"id": shirts["id"], "name": "Shirts"},
    })
    print(prod1)
    print(prod2)

    # -----------------------------
    # Update and list
    # -----------------------------
    print("\nMarking down the shirt...")
    print(c.update_product(prod1["id"], {"price": 15}))

    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting the jacket...")
    c.delete_product(prod2["id"])
    print(c.list_products())

    # -----------------------------
    # Charge (needs STRIPE_SECRET_KEY on the server)
    # -----------------------------
    print("\nCharging a test card...")
    r = c.pay("tok_visa", 1500)
    print(r.status_code, r.json())

if __name__ == "__main__":
    main()
