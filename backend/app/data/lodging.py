"""Curated lodging catalog for the resorts we have real listings for.

Resorts missing here get synthesized options from their lodging price range
(see ``app.services.lodging_optimizer.generate_lodging``).
"""

from dataclasses import dataclass
from types import MappingProxyType

HOTEL = "hotel"
RENTAL = "rental"


@dataclass(frozen=True)
class LodgingOption:
    name: str
    type: str  # "hotel" | "rental"
    slopeside: bool
    price_per_night: int
    sleeps: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "slopeside": self.slopeside,
            "pricePerNight": self.price_per_night,
            "sleeps": self.sleeps,
        }


def _opts(*rows) -> tuple[LodgingOption, ...]:
    return tuple(LodgingOption(*row) for row in rows)


LODGING_CATALOG: MappingProxyType = MappingProxyType({
    "Whistler Blackcomb": _opts(
        ("Fairmont Chateau Whistler", HOTEL, True, 450, 2),
        ("Hilton Whistler Resort", HOTEL, True, 320, 2),
        ("Creekside Chalet 8BR", RENTAL, False, 800, 12),
        ("Village Condo 3BR", RENTAL, True, 350, 6),
    ),
    "Vail": _opts(
        ("Four Seasons Vail", HOTEL, True, 600, 2),
        ("Lodge at Vail", HOTEL, True, 380, 2),
        ("Vail Mountain Lodge 6BR", RENTAL, False, 900, 10),
        ("Lionshead Village 2BR", RENTAL, True, 400, 4),
    ),
    "Park City": _opts(
        ("Montage Deer Valley", HOTEL, True, 500, 2),
        ("Marriott Mountainside", HOTEL, True, 280, 2),
        ("Canyons Village 5BR", RENTAL, False, 650, 10),
        ("Main St Townhouse 3BR", RENTAL, False, 320, 6),
    ),
    "Jackson Hole": _opts(
        ("Four Seasons Jackson Hole", HOTEL, True, 550, 2),
        ("Snow King Resort", HOTEL, False, 200, 2),
        ("Teton Village Cabin 4BR", RENTAL, True, 600, 8),
        ("Town Square Loft 2BR", RENTAL, False, 250, 4),
    ),
    "Chamonix": _opts(
        ("Grand Hotel des Alpes", HOTEL, False, 250, 2),
        ("Hotel Mont-Blanc", HOTEL, False, 350, 2),
        ("Chalet Les Praz 5BR", RENTAL, False, 500, 10),
        ("Centre Ville Apartment 2BR", RENTAL, False, 180, 4),
    ),
    "Niseko": _opts(
        ("Hilton Niseko Village", HOTEL, True, 250, 2),
        ("Ki Niseko", HOTEL, True, 300, 2),
        ("Hirafu Lodge 6BR", RENTAL, False, 400, 10),
        ("Annupuri Chalet 3BR", RENTAL, False, 200, 6),
    ),
})
