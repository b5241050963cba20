"""ORM Models: SQLAlchemy declarative models for the catalog tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - User, Pizza and Rating carry an increasing integer id and created_at:
      the retention policy orders on both

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from quickpizza.models.dough import Dough  # noqa: F401
from quickpizza.models.ingredient import Ingredient  # noqa: F401
from quickpizza.models.tool import Tool  # noqa: F401
from quickpizza.models.user import User  # noqa: F401
from quickpizza.models.pizza import Pizza  # noqa: F401
from quickpizza.models.pizza_ingredient import PizzaIngredient  # noqa: F401
from quickpizza.models.rating import Rating  # noqa: F401
