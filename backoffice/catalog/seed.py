"""Demo supermarket catalog used for seeding.

Stock levels are chosen so that a handful of products start at or
below their reorder level.
"""

DEMO_CATEGORIES = [
    "Bakery",
    "Beverages",
    "Dairy",
    "Frozen Foods",
    "Household",
    "Produce",
    "Snacks",
]

# (name, barcode, category, unit price, stock quantity, reorder level)
DEMO_PRODUCTS = [
    ("Apples 1kg", "4006381333931", "Produce", "3.49", 60, 20),
    ("Bananas 1kg", "4006381333948", "Produce", "1.99", 12, 15),
    ("Butter 250g", "5000112548167", "Dairy", "2.79", 25, 10),
    ("Cheddar Cheese 400g", "5000112548174", "Dairy", "4.99", 8, 10),
    ("Chocolate Bar 100g", "7622210449283", "Snacks", "1.29", 140, 30),
    ("Dish Soap 500ml", "8001090278479", "Household", "2.49", 35, 10),
    ("Frozen Peas 1kg", "5010044000893", "Frozen Foods", "2.19", 10, 10),
    ("Milk 1L", "5000112548181", "Dairy", "1.09", 80, 25),
    ("Orange Juice 1L", "5449000054227", "Beverages", "2.99", 45, 15),
    ("Paper Towels 4-pack", "8001090278486", "Household", "5.49", 18, 6),
    ("Potato Chips 150g", "5053990101573", "Snacks", "1.89", 4, 20),
    ("Sparkling Water 1.5L", "5449000131805", "Beverages", "0.89", 120, 40),
    ("Vanilla Ice Cream 1L", "5010044000909", "Frozen Foods", "4.29", 22, 8),
    ("Whole Wheat Bread", "5010029000382", "Bakery", "2.39", 30, 12),
]
