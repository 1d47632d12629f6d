from pageform.logic.form import Form
from pageform.logic.link import Link
from pageform.logic.page import Page
from pageform.logic.registry import FieldRegistry

__all__ = ["FieldRegistry", "Form", "Link", "Page"]
