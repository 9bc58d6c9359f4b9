import pytest

from utils.constants import DEFAULT_CATEGORIES
from utils.exceptions import NotFoundError, ValidationError


def test_defaults_are_seeded_once(db, category_service):
    assert len(category_service.get_all()) == len(DEFAULT_CATEGORIES)
    db.initialize()
    assert len(category_service.get_all()) == len(DEFAULT_CATEGORIES)
    assert len(category_service.get_for_type("expense")) == 8
    assert len(category_service.get_for_type("income")) == 5


def test_get_for_type_rejects_unknown_type(category_service):
    with pytest.raises(ValidationError):
        category_service.get_for_type("both")


def test_create_custom(category_service):
    cat = category_service.create_custom("  Pets ", "expense", "Heart", "#a1b2c3")
    assert cat.name == "Pets"
    assert cat.is_custom
    assert cat.icon == "Heart"
    assert cat.color == "#A1B2C3"


def test_create_custom_unknown_icon_falls_back(category_service):
    cat = category_service.create_custom("Hobbies", "expense", "Unicorn")
    assert cat.icon == "Package"
    assert cat.color == "#3B82F6"


@pytest.mark.parametrize("name, type_, color", [
    ("", "expense", None),
    ("Gym", "transfer", None),
    ("Gym", "expense", "blue"),
    ("gym", "expense", "#12345"),
    ("shopping", "expense", None),
])
def test_create_custom_rejects_invalid(category_service, name, type_, color):
    with pytest.raises(ValidationError):
        category_service.create_custom(name, type_, color=color)


def test_delete_custom_category(category_service):
    cat = category_service.create_custom("Pets", "expense")
    category_service.delete(cat.id)
    assert "Pets" not in {c.name for c in category_service.get_all()}
    with pytest.raises(NotFoundError):
        category_service.delete(cat.id)


def test_builtin_and_used_categories_cannot_be_deleted(category_service, tx_service, categories):
    with pytest.raises(ValidationError):
        category_service.delete(categories["Shopping"].id)

    pets = category_service.create_custom("Pets", "expense")
    tx_service.add_transaction("expense", 12, pets.id, "2024-06-12")
    with pytest.raises(ValidationError):
        category_service.delete(pets.id)
