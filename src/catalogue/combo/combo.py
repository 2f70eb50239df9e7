"""ComboPack aggregate — a discounted bundle of catalogue products.

Combo packs are derived from the product feed rather than loaded from it.
When a shopper adds a combo, every item lands in the cart tagged with the
combo's id.
"""

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, String, Text

from catalogue.domain import catalogue
from catalogue.product.product import ProductCategory


@catalogue.entity(part_of="ComboPack")
class ComboItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=500)


@catalogue.aggregate
class ComboPack:
    id = Identifier(identifier=True)
    name = String(required=True, max_length=150)
    description = Text()
    discount = Float(default=0.0, min_value=0.0)
    image = String(max_length=500)
    items = HasMany(ComboItem)

    @invariant.post
    def discount_cannot_exceed_item_total(self):
        if self.items and self.discount > self.original_price:
            raise ValidationError({"discount": ["Discount cannot exceed the combined item price"]})

    @classmethod
    def assemble(cls, combo_id, name, description, products, discount):
        """Create a combo from catalogue products.

        The discount is capped at the combined price of the products.
        """
        combo = cls(
            id=combo_id,
            name=name,
            description=description,
            discount=min(discount, sum(p.price for p in products)),
            image=products[0].primary_image if products else None,
        )
        with atomic_change(combo):
            for product in products:
                combo.add_items(
                    ComboItem(
                        product_id=product.id,
                        name=product.name,
                        price=product.price,
                        image=product.primary_image,
                    )
                )
        return combo

    @property
    def original_price(self):
        return sum(item.price for item in self.items)

    @property
    def price(self):
        return self.original_price - (self.discount or 0.0)


def build_combo_packs(products):
    """Derive the storefront's combo packs from the product list.

    Combos whose ingredients are missing from the feed are skipped.
    """
    by_id = {p.id: p for p in products}
    vegetables = [p for p in products if p.category == ProductCategory.VEGETABLES.value]
    dairy = [p for p in products if p.category == ProductCategory.DAIRY.value]

    combos = []

    if len(vegetables) >= 2:
        combos.append(
            ComboPack.assemble(
                "combo-1",
                "Vegetable Combo",
                "Weekly essential vegetables",
                vegetables[:2],
                discount=10,
            )
        )

    specials = [by_id.get(pid) for pid in ("veg_onion", "veg_brinjal", "pulse_toor")]
    if all(specials):
        combos.append(
            ComboPack.assemble(
                "combo-special",
                "Local Specials Combo",
                "Onion, Brinjal and Toor Daal combo - local favorites",
                specials,
                discount=40,
            )
        )

    if len(dairy) >= 2:
        combos.append(
            ComboPack.assemble(
                "combo-2",
                "Dairy Combo",
                "Weekly dairy essentials",
                dairy[:2],
                discount=50,
            )
        )
    elif len(products) >= 2:
        combos.append(
            ComboPack.assemble(
                "combo-2",
                "Local Specials Combo",
                "Weekly local specials",
                products[:2],
                discount=30,
            )
        )

    return combos
