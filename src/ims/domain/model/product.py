"""Product aggregate.

A product is either an *ingredient* (it owns a stock count and a unit
cost) or a *bundle* (a combo of other products; price and availability
are derived from its components).  Both variants share one ``Product``
entity carrying a kind-specific ``variant``; behaviour that depends on the
variant is plain recursion over that variant.

Invariants:
- an ingredient's ``stock_current`` never goes below zero
- a bundle never holds stock of its own
- a bundle never contains itself, directly or transitively
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ims.domain.exceptions import InsufficientStockError, ValidationError
from ims.domain.model.value_objects import Money, require_positive, require_text

PLACEHOLDER_NAME = "N/A"


class ProductKind(Enum):
    INGREDIENT = "INGREDIENT"
    BUNDLE = "BUNDLE"


class UnitOfMeasure(Enum):
    UNIT = "UNIT"
    KILOGRAM = "KILOGRAM"
    GRAM = "GRAM"
    LITER = "LITER"
    MILLILITER = "MILLILITER"


@dataclass
class Ingredient:
    """Payload of an atomic product."""

    unit: UnitOfMeasure
    cost_per_unit: Money
    stock_current: int = 0
    stock_minimum: int = 0

    def __post_init__(self) -> None:
        if self.stock_current < 0 or self.stock_minimum < 0:
            raise ValidationError("Stock levels cannot be negative")


@dataclass(frozen=True)
class BundleComponent:
    """``quantity`` units of ``product`` inside one bundle."""

    product: Product
    quantity: int

    def __post_init__(self) -> None:
        if self.product is None:
            raise ValidationError("Bundle component requires a product")
        require_positive(self.quantity, "Component quantity")


@dataclass
class Bundle:
    """Payload of a composite product."""

    components: list[BundleComponent] = field(default_factory=list)


@dataclass
class Product:
    """A product in the catalog.

    Use the ``ingredient()`` / ``bundle()`` factories; they validate the
    arguments.  Components are held by reference so stock and price
    changes of a component are visible through every bundle using it.
    """

    id: str
    name: str
    variant: Ingredient | Bundle
    is_placeholder: bool = field(default=False, compare=False)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def ingredient(
        id: str,
        name: str,
        stock_current: int,
        stock_minimum: int,
        unit: UnitOfMeasure,
        cost_per_unit: Money,
    ) -> Product:
        if not isinstance(unit, UnitOfMeasure):
            raise ValidationError(f"Unknown unit of measure: {unit!r}")
        if not isinstance(cost_per_unit, Money):
            raise ValidationError("Cost per unit is required")
        return Product(
            id=require_text(id, "Product id"),
            name=require_text(name, "Product name"),
            variant=Ingredient(
                unit=unit,
                cost_per_unit=cost_per_unit,
                stock_current=stock_current,
                stock_minimum=stock_minimum,
            ),
        )

    @staticmethod
    def bundle(
        id: str,
        name: str,
        components: list[tuple[Product, int]] | None = None,
    ) -> Product:
        product = Product(
            id=require_text(id, "Product id"),
            name=require_text(name, "Product name"),
            variant=Bundle(),
        )
        for component, quantity in components or []:
            product.add_component(component, quantity)
        return product

    @staticmethod
    def placeholder(product_id: str, cost_per_unit: Money | None = None) -> Product:
        """Stand-in for a product that no longer exists in the catalog."""
        return Product(
            id=product_id,
            name=PLACEHOLDER_NAME,
            variant=Ingredient(
                unit=UnitOfMeasure.UNIT,
                cost_per_unit=cost_per_unit or Money.zero(),
            ),
            is_placeholder=True,
        )

    # --- Read side ------------------------------------------------------------

    @property
    def kind(self) -> ProductKind:
        if isinstance(self.variant, Bundle):
            return ProductKind.BUNDLE
        return ProductKind.INGREDIENT

    @property
    def is_bundle(self) -> bool:
        return self.kind is ProductKind.BUNDLE

    @property
    def stock_current(self) -> int:
        """Own stock; bundles report 0 (see ``available_units``)."""
        if isinstance(self.variant, Ingredient):
            return self.variant.stock_current
        return 0

    @property
    def stock_minimum(self) -> int:
        if isinstance(self.variant, Ingredient):
            return self.variant.stock_minimum
        return 0

    @property
    def components(self) -> tuple[BundleComponent, ...]:
        if isinstance(self.variant, Bundle):
            return tuple(self.variant.components)
        return ()

    def price(self) -> Money:
        """Unit cost for ingredients, sum of component prices for bundles."""
        return _price(self)

    def available_units(self) -> int:
        """How many units could be sold right now."""
        return _available_units(self)

    def stock_requirements(self, quantity: int) -> dict[str, tuple[Product, int]]:
        """Ingredient stock needed to supply *quantity* units of this product.

        Returns ``{ingredient_id: (ingredient, units)}`` with the units of
        repeated ingredients summed.
        """
        require_positive(quantity)
        requirements: dict[str, tuple[Product, int]] = {}
        _collect_requirements(self, quantity, requirements)
        return requirements

    # --- Stock adjustments ----------------------------------------------------

    def deduct_stock(self, quantity: int) -> None:
        """Remove *quantity* units from stock, all or nothing.

        For a bundle every transitive ingredient is checked first; nothing
        is decremented unless all of them can cover the request.
        """
        requirements = self.stock_requirements(quantity)
        ensure_available(requirements.values())
        for ingredient, units in requirements.values():
            ingredient.variant.stock_current -= units

    def add_stock(self, quantity: int) -> None:
        require_positive(quantity)
        if not isinstance(self.variant, Ingredient):
            raise ValidationError(f"Bundle '{self.id}' holds no stock of its own")
        self.variant.stock_current += quantity

    # --- Catalog maintenance --------------------------------------------------

    def rename(self, name: str) -> None:
        self.name = require_text(name, "Product name")

    def set_stock_minimum(self, minimum: int) -> None:
        if not isinstance(self.variant, Ingredient):
            raise ValidationError(f"Bundle '{self.id}' has no minimum stock")
        if minimum < 0:
            raise ValidationError("Minimum stock cannot be negative")
        self.variant.stock_minimum = minimum

    def update_cost(self, cost_per_unit: Money) -> None:
        if not isinstance(self.variant, Ingredient):
            raise ValidationError(f"Bundle '{self.id}' price derives from its components")
        self.variant.cost_per_unit = cost_per_unit

    def add_component(self, product: Product, quantity: int) -> None:
        if not isinstance(self.variant, Bundle):
            raise ValidationError(f"Product '{self.id}' is not a bundle")
        if product is None:
            raise ValidationError("Bundle component requires a product")
        if product.id == self.id or _contains(product, self.id):
            raise ValidationError(
                f"Bundle '{self.id}' cannot contain itself (via '{product.id}')"
            )
        self.variant.components.append(BundleComponent(product, quantity))

    def uses(self, product_id: str) -> bool:
        """True if *product_id* is a direct or transitive component."""
        return any(
            c.product.id == product_id or _contains(c.product, product_id)
            for c in self.components
        )


def ensure_available(requirements) -> None:
    """Raise InsufficientStockError for the first ``(ingredient, units)`` not covered."""
    for ingredient, units in requirements:
        if ingredient.stock_current < units:
            raise InsufficientStockError(ingredient.id, units, ingredient.stock_current)


# ---------------------------------------------------------------------------
# Recursion over the product variants
# ---------------------------------------------------------------------------


def _price(product: Product) -> Money:
    if isinstance(product.variant, Ingredient):
        return product.variant.cost_per_unit
    total = Money.zero()
    for component in product.variant.components:
        total = total + _price(component.product) * component.quantity
    return total


def _available_units(product: Product) -> int:
    if isinstance(product.variant, Ingredient):
        return product.variant.stock_current
    if not product.variant.components:
        return 0
    return min(
        _available_units(c.product) // c.quantity for c in product.variant.components
    )


def _collect_requirements(
    product: Product,
    quantity: int,
    into: dict[str, tuple[Product, int]],
) -> None:
    if isinstance(product.variant, Ingredient):
        _, already = into.get(product.id, (product, 0))
        into[product.id] = (product, already + quantity)
        return
    if not product.variant.components:
        # nothing to draw stock from
        raise InsufficientStockError(product.id, quantity, 0)
    for component in product.variant.components:
        _collect_requirements(component.product, component.quantity * quantity, into)


def _contains(product: Product, product_id: str) -> bool:
    if not isinstance(product.variant, Bundle):
        return False
    return any(
        c.product.id == product_id or _contains(c.product, product_id)
        for c in product.variant.components
    )
