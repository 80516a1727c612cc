from types import SimpleNamespace

from househub.services.staples import (
    SOURCE_CUSTOM,
    SOURCE_DEFAULT,
    available_staples,
    combine_staples,
    find_existing_item,
    low_stock,
)

DEFAULTS = [
    SimpleNamespace(id=1, name="Coffee", category="staples", default_threshold=1, display_order=0),
    SimpleNamespace(id=2, name="Dish soap", category="kitchen", default_threshold=1, display_order=1),
]
CUSTOMS = [SimpleNamespace(id=1, name="Oat milk", category="staples", default_threshold=2)]


def test_combine_tags_source_table():
    combined = combine_staples(DEFAULTS, CUSTOMS)
    assert [(s.name, s.source_table) for s in combined] == [
        ("Coffee", SOURCE_DEFAULT),
        ("Dish soap", SOURCE_DEFAULT),
        ("Oat milk", SOURCE_CUSTOM),
    ]


def test_existing_item_match_ignores_case_but_not_category():
    items = [SimpleNamespace(name=" coffee ", category="staples")]
    assert find_existing_item("COFFEE", "staples", items) is items[0]
    assert find_existing_item("Coffee", "kitchen", items) is None
    assert find_existing_item("", "staples", items) is None


def test_available_excludes_tracked():
    items = [SimpleNamespace(name="coffee", category="staples"), SimpleNamespace(name=None, category="x")]
    names = [s.name for s in available_staples(combine_staples(DEFAULTS, CUSTOMS), items)]
    assert names == ["Dish soap", "Oat milk"]


def test_low_stock_is_inclusive():
    items = [
        SimpleNamespace(name="a", quantity=0, threshold=1),
        SimpleNamespace(name="b", quantity=1, threshold=1),
        SimpleNamespace(name="c", quantity=5, threshold=1),
        SimpleNamespace(name="d", quantity=None, threshold=1),
    ]
    assert [i.name for i in low_stock(items)] == ["a", "b"]
