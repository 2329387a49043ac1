"""
storefront_api.seed.catalog

Starter product catalogue written by the seeder.

`sku` is the merge key: re-seeding updates these entries in place.
"""

from __future__ import annotations

from typing import Any

SEED_PRODUCTS: list[dict[str, Any]] = [
    {
        "sku": "TEE-CLASSIC-WHT",
        "name": "Classic Cotton Tee",
        "description": "Heavyweight 100% cotton t-shirt with a relaxed fit.",
        "category": "apparel",
        "price": 19.99,
        "image": "/images/tee-classic-white.jpg",
        "stock": 120,
    },
    {
        "sku": "HOOD-ZIP-GRY",
        "name": "Zip Hoodie",
        "description": "Brushed fleece hoodie with a full-length zip and kangaroo pockets.",
        "category": "apparel",
        "price": 54.0,
        "image": "/images/hoodie-zip-grey.jpg",
        "stock": 60,
    },
    {
        "sku": "JEANS-SLIM-IND",
        "name": "Slim Denim Jeans",
        "description": "Indigo stretch denim, slim through the leg.",
        "category": "apparel",
        "price": 69.5,
        "image": "/images/jeans-slim-indigo.jpg",
        "stock": 45,
    },
    {
        "sku": "SNKR-RUN-BLK",
        "name": "Everyday Running Sneakers",
        "description": "Lightweight mesh running shoes with a cushioned sole.",
        "category": "footwear",
        "price": 89.0,
        "image": "/images/sneaker-run-black.jpg",
        "stock": 35,
    },
    {
        "sku": "BOOT-CHEL-BRN",
        "name": "Leather Chelsea Boots",
        "description": "Full-grain leather boots with elastic side panels.",
        "category": "footwear",
        "price": 139.0,
        "image": "/images/boot-chelsea-brown.jpg",
        "stock": 20,
    },
    {
        "sku": "BAG-TOTE-CNV",
        "name": "Canvas Tote Bag",
        "description": "Durable canvas tote with an interior zip pocket.",
        "category": "accessories",
        "price": 24.0,
        "image": "/images/tote-canvas.jpg",
        "stock": 80,
    },
    {
        "sku": "CAP-BASE-NVY",
        "name": "Baseball Cap",
        "description": "Washed cotton cap with an adjustable strap.",
        "category": "accessories",
        "price": 22.0,
        "image": "/images/cap-navy.jpg",
        "stock": 75,
    },
    {
        "sku": "WATCH-MIN-SLV",
        "name": "Minimalist Watch",
        "description": "Stainless steel case, sapphire glass, quartz movement.",
        "category": "accessories",
        "price": 149.0,
        "image": "/images/watch-minimal-silver.jpg",
        "stock": 15,
    },
    {
        "sku": "HDPH-WL-BLK",
        "name": "Wireless Headphones",
        "description": "Over-ear bluetooth headphones with active noise cancelling.",
        "category": "electronics",
        "price": 199.0,
        "image": "/images/headphones-black.jpg",
        "stock": 25,
    },
    {
        "sku": "SPK-PORT-BLU",
        "name": "Portable Speaker",
        "description": "Water-resistant bluetooth speaker with 12 hour battery life.",
        "category": "electronics",
        "price": 59.0,
        "image": "/images/speaker-blue.jpg",
        "stock": 40,
    },
    {
        "sku": "MUG-CER-WHT",
        "name": "Ceramic Mug",
        "description": "Stoneware mug, 350 ml, dishwasher safe.",
        "category": "home",
        "price": 12.5,
        "image": "/images/mug-white.jpg",
        "stock": 150,
    },
    {
        "sku": "LAMP-DESK-OAK",
        "name": "Oak Desk Lamp",
        "description": "Solid oak desk lamp with a warm LED bulb.",
        "category": "home",
        "price": 79.0,
        "image": "/images/lamp-oak.jpg",
        "stock": 18,
    },
]
