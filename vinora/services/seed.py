"""Reference wines used when no snapshot exists yet."""

from datetime import datetime, timezone

from vinora.models import Wine, WineType


def seed_wines() -> list[Wine]:
    """Return a fresh copy of the built-in starter collection."""
    now = datetime.now(timezone.utc)
    return [
        Wine(
            id="1",
            name="Château Bel-Air",
            producer="Domaine de Bel-Air",
            vintage=2018,
            wine_type=WineType.ROUGE,
            grape_variety="Merlot, Cabernet Franc",
            region="Saint-Émilion Grand Cru",
            country="France",
            stock=24,
            low_stock_threshold=12,
            price=45.00,
            description="Un vin puissant aux notes de fruits noirs et de boisé fin.",
            last_updated=now,
        ),
        Wine(
            id="2",
            name="Domaine des Alouettes",
            producer="Vignobles Henry",
            vintage=2020,
            wine_type=WineType.BLANC,
            grape_variety="Sauvignon Blanc",
            region="Sancerre",
            country="France",
            stock=4,
            low_stock_threshold=10,
            price=22.50,
            description="Une fraîcheur minérale caractéristique du Sauvignon Blanc.",
            last_updated=now,
        ),
        Wine(
            id="3",
            name="Terre Promise",
            producer="Château Miraval",
            vintage=2022,
            wine_type=WineType.ROSE,
            grape_variety="Cinsault, Grenache",
            region="Côtes de Provence",
            country="France",
            stock=48,
            low_stock_threshold=24,
            price=18.00,
            description="Notes d'agrumes et de fleurs blanches, très rafraîchissant.",
            last_updated=now,
        ),
    ]
