"""Built-in product assortment used when no other catalog is supplied."""

from catalog.product.catalog import Catalog

PRODUCTS = [
    {
        "id": 1,
        "title": "Samsung 55\" Crystal UHD TV",
        "description": "4K UHD smart TV with HDR and Tizen OS",
        "colors": ["black"],
        "rating": 4.8,
        "price": 459_000,
        "is_black_friday": True,
        "sale_percentage": 15,
        "media": ["/images/tv-samsung-55-1.jpg", "/images/tv-samsung-55-2.jpg"],
        "type": "tv",
        "diagonals": ["43\"", "50\"", "55\""],
    },
    {
        "id": 2,
        "title": "LG 43\" Full HD TV",
        "description": "Full HD LED TV with webOS",
        "colors": ["black"],
        "rating": 4.5,
        "price": 289_000,
        "is_black_friday": False,
        "sale_percentage": 0,
        "media": ["/images/tv-lg-43-1.jpg"],
        "type": "tv",
        "diagonals": ["43\""],
    },
    {
        "id": 3,
        "title": "Samsung Galaxy A55 phone",
        "description": "6.6\" Super AMOLED, 128 GB",
        "colors": ["navy", "lilac", "ice blue"],
        "rating": 4.7,
        "price": 399_000,
        "is_black_friday": True,
        "sale_percentage": 20,
        "media": ["/images/phone-a55-1.jpg", "/images/phone-a55-2.jpg"],
        "type": "phone",
    },
    {
        "id": 4,
        "title": "Xiaomi Redmi 13 phone",
        "description": "6.79\" display, 8/256 GB",
        "colors": ["black", "pink"],
        "rating": 4.4,
        "price": 189_000,
        "is_black_friday": False,
        "sale_percentage": 10,
        "media": ["/images/phone-redmi-13-1.jpg"],
        "type": "phone",
    },
    {
        "id": 5,
        "title": "Flip phone Nokia 2660",
        "description": "Classic clamshell phone with large buttons",
        "colors": ["red", "black"],
        "rating": 4.1,
        "price": 59_000,
        "is_black_friday": False,
        "sale_percentage": 0,
        "media": ["/images/phone-nokia-2660-1.jpg"],
        "type": "phone",
    },
    {
        "id": 6,
        "title": "Tefal Easy Fry air fryer",
        "description": "4.2 L air fryer with 8 programs",
        "colors": ["black"],
        "rating": 4.9,
        "price": 119_000,
        "is_black_friday": True,
        "sale_percentage": 25,
        "media": ["/images/airfryer-tefal-1.jpg"],
        "type": "appliance",
    },
    {
        "id": 7,
        "title": "Philips steam iron",
        "description": "2400 W steam iron with ceramic soleplate",
        "colors": ["blue", "white"],
        "rating": 4.6,
        "price": 45_000,
        "is_black_friday": False,
        "sale_percentage": 5,
        "media": ["/images/iron-philips-1.jpg"],
        "type": "appliance",
    },
    {
        "id": 8,
        "title": "JBL Tune 520BT headphones",
        "description": "Wireless on-ear headphones, 57 h battery",
        "colors": ["black", "white", "blue"],
        "rating": 4.3,
        "price": 49_000,
        "is_black_friday": False,
        "sale_percentage": 0,
        "media": ["/images/headphones-jbl-520-1.jpg"],
        "type": "audio",
    },
]


def load_default_catalog() -> Catalog:
    return Catalog.from_records(PRODUCTS)
