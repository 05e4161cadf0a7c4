"""Domain models for collectible coffee stickers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CollectibleItem:
    """Static catalog entry for a sticker."""

    id: int
    name: str
    is_premium: bool


STICKER_CATALOG: tuple[CollectibleItem, ...] = (
    CollectibleItem(id=0, name="Caffè Americano", is_premium=False),
    CollectibleItem(id=1, name="Espresso", is_premium=False),
    CollectibleItem(id=2, name="Caffè Latte", is_premium=False),
    CollectibleItem(id=3, name="Cappuccino", is_premium=False),
    CollectibleItem(id=4, name="Caffè Mocha", is_premium=False),
    CollectibleItem(id=5, name="Flat White", is_premium=False),
    CollectibleItem(id=6, name="Macchiato", is_premium=False),
    CollectibleItem(id=7, name="Irish Coffee", is_premium=False),
    CollectibleItem(id=8, name="Affogato", is_premium=False),
    CollectibleItem(id=9, name="Ristretto", is_premium=False),
    CollectibleItem(id=10, name="Turkish Coffee", is_premium=True),
    CollectibleItem(id=11, name="Vietnamese Coffee", is_premium=True),
    CollectibleItem(id=12, name="Greek Frappé", is_premium=True),
    CollectibleItem(id=13, name="Dalgona Coffee", is_premium=True),
    CollectibleItem(id=14, name="Café Cubano", is_premium=True),
    CollectibleItem(id=15, name="Café con Leche", is_premium=True),
    CollectibleItem(id=16, name="Red Eye", is_premium=True),
    CollectibleItem(id=17, name="Cortado", is_premium=True),
    CollectibleItem(id=18, name="Café au Lait", is_premium=True),
    CollectibleItem(id=19, name="Cold Brew", is_premium=True),
)

CATALOG_SIZE = len(STICKER_CATALOG)


@dataclass(frozen=True)
class CollectionProgress:
    """How much of the catalog has been collected."""

    collected: int
    total: int

    @property
    def fraction(self) -> float:
        """Return the collected share in [0, 1]."""
        if self.total <= 0:
            return 0.0
        return self.collected / self.total

    @property
    def label(self) -> str:
        """Return the progress caption shown next to the collection."""
        return f"{self.collected}/{self.total} Collected"
