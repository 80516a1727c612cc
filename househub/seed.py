"""Seed the shared default staples list."""
from sqlalchemy.orm import Session
from househub.models.inventory import DefaultStaple

DEFAULT_STAPLES = [
    ("Toilet paper", "bathroom", 4),
    ("Paper towels", "kitchen", 2),
    ("Dish soap", "kitchen", 1),
    ("Hand soap", "bathroom", 1),
    ("Trash bags", "supplies", 1),
    ("Laundry detergent", "cleaning", 1),
    ("All-purpose cleaner", "cleaning", 1),
    ("Coffee", "staples", 1),
    ("Salt", "staples", 1),
    ("Olive oil", "staples", 1),
    ("Light bulbs", "supplies", 2),
    ("Batteries", "supplies", 4),
]


def seed_default_staples(db: Session) -> None:
    if db.query(DefaultStaple).count() > 0:
        return
    for order, (name, category, threshold) in enumerate(DEFAULT_STAPLES):
        db.add(DefaultStaple(name=name, category=category, default_threshold=threshold, display_order=order))
    db.commit()
