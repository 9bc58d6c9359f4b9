import logging
import re

from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from models.category import Category
from utils.constants import CATEGORY_TYPES, DEFAULT_CUSTOM_COLOR
from utils.exceptions import NotFoundError, ValidationError
from utils.icons import normalize_icon_name

logger = logging.getLogger(__name__)

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class CategoryService:
    def __init__(self, category_dao: CategoryDAO, tx_dao: TransactionDAO):
        self._dao = category_dao
        self._tx_dao = tx_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_for_type(self, type_: str) -> list[Category]:
        if type_ not in CATEGORY_TYPES:
            raise ValidationError(f"Invalid category type: {type_}")
        return self._dao.get_by_type(type_)

    def create_custom(
        self,
        name: str,
        type_: str,
        icon: str | None = None,
        color: str | None = None,
    ) -> Category:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required.")
        if type_ not in CATEGORY_TYPES:
            raise ValidationError(f"Invalid category type: {type_}")
        color = (color or DEFAULT_CUSTOM_COLOR).strip()
        if not _COLOR_RE.match(color):
            raise ValidationError(f"Invalid color: {color}. Use #RRGGBB.")
        existing = [c.name.lower() for c in self._dao.get_all()]
        if name.lower() in existing:
            raise ValidationError(f"A category named '{name}' already exists.")
        category = self._dao.create(name, type_, normalize_icon_name(icon), color.upper())
        logger.info("Created custom %s category %r", type_, name)
        return category

    def delete(self, category_id: int):
        cat = self._dao.get_by_id(category_id)
        if cat is None:
            raise NotFoundError(f"Category {category_id} does not exist.")
        if not cat.is_custom:
            raise ValidationError("Built-in categories cannot be deleted.")
        if self._tx_dao.count_for_category(category_id):
            raise ValidationError(
                f"'{cat.name}' is used by existing transactions and cannot be deleted."
            )
        self._dao.delete(category_id)
        logger.info("Deleted category %r", cat.name)
