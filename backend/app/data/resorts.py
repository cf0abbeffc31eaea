"""Static resort catalog.

Terrain percentages per resort sum to 100. ``passes`` holds lower-case pass
identifiers ("ikon", "epic" or "none"). Loaded once at import; never mutated.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class Terrain:
    beginner: int
    intermediate: int
    advanced: int
    expert: int

    @property
    def total(self) -> int:
        return self.beginner + self.intermediate + self.advanced + self.expert

    def to_dict(self) -> dict:
        return {
            "beginner": self.beginner,
            "intermediate": self.intermediate,
            "advanced": self.advanced,
            "expert": self.expert,
        }


@dataclass(frozen=True)
class ResortProfile:
    name: str
    country: str
    region: str
    lat: float
    lng: float
    nearest_airport: str
    passes: frozenset[str]
    terrain: Terrain
    lift_ticket: int
    vibe_tags: tuple[str, ...]
    non_skier_score: int
    apres_score: int
    lodging_range: tuple[int, int]
    ski_in_out: bool

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "country": self.country,
            "region": self.region,
            "lat": self.lat,
            "lng": self.lng,
            "nearestAirport": self.nearest_airport,
            "pass": sorted(self.passes),
            "terrain": self.terrain.to_dict(),
            "liftTicket": self.lift_ticket,
            "vibeTags": list(self.vibe_tags),
            "nonSkierScore": self.non_skier_score,
            "apresScore": self.apres_score,
            "lodgingRange": list(self.lodging_range),
            "skiInOut": self.ski_in_out,
        }


def _resort(name, country, region, lat, lng, airport, passes, terrain, lift, vibes,
            non_skier, apres, lodging, ski_in_out) -> ResortProfile:
    return ResortProfile(
        name=name,
        country=country,
        region=region,
        lat=lat,
        lng=lng,
        nearest_airport=airport,
        passes=frozenset(passes),
        terrain=Terrain(*terrain),
        lift_ticket=lift,
        vibe_tags=tuple(vibes),
        non_skier_score=non_skier,
        apres_score=apres,
        lodging_range=lodging,
        ski_in_out=ski_in_out,
    )


NA = "North America"
EU = "Europe"
JP = "Japan/Asia"

REGIONS: tuple[str, ...] = (NA, EU, JP)

RESORTS: tuple[ResortProfile, ...] = (
    # North America
    _resort("Whistler Blackcomb", "Canada", NA, 50.1163, -122.9574, "YVR", ["epic"], (20, 55, 15, 10), 230, ["party", "family", "luxury"], 9, 9, (200, 800), True),
    _resort("Vail", "USA", NA, 39.6403, -106.3742, "EGE", ["epic"], (18, 29, 36, 17), 250, ["luxury", "party"], 8, 9, (250, 1000), True),
    _resort("Park City", "USA", NA, 40.6461, -111.498, "SLC", ["epic"], (17, 52, 19, 12), 220, ["family", "luxury", "party"], 9, 8, (180, 700), True),
    _resort("Jackson Hole", "USA", NA, 43.5877, -110.828, "JAC", ["ikon"], (10, 40, 30, 20), 210, ["expert", "scenic"], 7, 7, (200, 800), True),
    _resort("Telluride", "USA", NA, 37.9375, -107.8123, "MTJ", ["epic"], (23, 36, 23, 18), 215, ["scenic", "luxury", "relaxed"], 8, 7, (200, 900), True),
    _resort("Mammoth Mountain", "USA", NA, 37.6308, -119.0326, "MMH", ["ikon"], (25, 40, 20, 15), 185, ["party", "value"], 5, 7, (120, 400), False),
    _resort("Steamboat", "USA", NA, 40.457, -106.8045, "HDN", ["ikon"], (14, 42, 30, 14), 195, ["family", "relaxed"], 7, 6, (150, 500), True),
    _resort("Stowe", "USA", NA, 44.5303, -72.7815, "BTV", ["epic"], (16, 59, 17, 8), 180, ["scenic", "relaxed", "luxury"], 8, 7, (150, 600), False),
    _resort("Sunday River", "USA", NA, 44.4734, -70.8564, "PWM", ["ikon"], (30, 36, 22, 12), 135, ["family", "value"], 5, 5, (100, 300), True),
    _resort("Killington", "USA", NA, 43.6045, -72.8201, "BTV", ["ikon"], (28, 33, 21, 18), 155, ["party", "value"], 5, 8, (100, 350), False),
    _resort("Big Sky", "USA", NA, 45.2838, -111.4014, "BZN", ["ikon"], (15, 25, 35, 25), 200, ["expert", "scenic", "relaxed"], 5, 5, (150, 600), True),
    _resort("Taos Ski Valley", "USA", NA, 36.5964, -105.4544, "ABQ", ["ikon"], (24, 25, 25, 26), 145, ["expert", "value", "relaxed"], 6, 5, (100, 350), True),
    _resort("Alta", "USA", NA, 40.5884, -111.6386, "SLC", ["ikon"], (25, 40, 20, 15), 150, ["expert", "value", "relaxed"], 2, 3, (120, 400), True),
    _resort("Snowbird", "USA", NA, 40.5830, -111.6508, "SLC", ["ikon"], (27, 38, 20, 15), 170, ["expert", "scenic"], 4, 5, (150, 500), True),
    _resort("Arapahoe Basin", "USA", NA, 39.6426, -105.8718, "DEN", ["ikon"], (10, 30, 37, 23), 120, ["expert", "value"], 2, 4, (80, 200), False),
    _resort("Banff Sunshine", "Canada", NA, 51.0783, -115.7731, "YYC", ["ikon"], (20, 55, 15, 10), 140, ["scenic", "value", "family"], 7, 6, (120, 400), False),
    _resort("Lake Louise", "Canada", NA, 51.4254, -116.1773, "YYC", ["ikon"], (25, 45, 20, 10), 135, ["scenic", "relaxed", "luxury"], 8, 5, (150, 600), False),
    _resort("Mont-Tremblant", "Canada", NA, 46.2149, -74.5853, "YUL", ["ikon"], (26, 32, 28, 14), 115, ["party", "family", "value"], 8, 8, (100, 400), True),
    _resort("Revelstoke", "Canada", NA, 51.0285, -118.1690, "YLW", ["ikon"], (7, 38, 30, 25), 130, ["expert", "scenic"], 4, 4, (100, 350), False),
    _resort("Aspen Snowmass", "USA", NA, 39.2084, -106.9490, "ASE", ["ikon"], (20, 35, 28, 17), 230, ["luxury", "party", "scenic"], 9, 9, (250, 1200), True),
    _resort("Deer Valley", "USA", NA, 40.6374, -111.4783, "SLC", ["ikon"], (27, 41, 24, 8), 240, ["luxury", "family", "relaxed"], 8, 7, (300, 1000), True),
    _resort("Breckenridge", "USA", NA, 39.4817, -106.0384, "DEN", ["epic"], (15, 33, 33, 19), 210, ["party", "family"], 7, 8, (150, 600), True),
    _resort("Copper Mountain", "USA", NA, 39.5022, -106.1497, "DEN", ["ikon"], (21, 25, 36, 18), 165, ["value", "family"], 5, 5, (100, 350), True),
    _resort("Squaw Valley / Palisades", "USA", NA, 39.1968, -120.2354, "RNO", ["ikon"], (25, 40, 20, 15), 195, ["party", "expert", "scenic"], 7, 8, (150, 600), False),
    _resort("Sun Valley", "USA", NA, 43.6972, -114.3514, "SUN", ["epic"], (36, 42, 14, 8), 175, ["luxury", "scenic", "relaxed"], 7, 6, (150, 600), False),
    _resort("Winter Park", "USA", NA, 39.8868, -105.7625, "DEN", ["ikon"], (8, 17, 42, 33), 170, ["value", "expert"], 4, 5, (100, 350), False),
    # Europe
    _resort("Chamonix", "France", EU, 45.9237, 6.8694, "GVA", ["none"], (15, 30, 30, 25), 70, ["expert", "party", "scenic"], 8, 8, (100, 500), False),
    _resort("Verbier", "Switzerland", EU, 46.0967, 7.2286, "GVA", ["none"], (15, 35, 30, 20), 85, ["expert", "party", "luxury"], 7, 9, (180, 800), False),
    _resort("Zermatt", "Switzerland", EU, 46.0207, 7.7491, "GVA", ["none"], (20, 45, 25, 10), 90, ["scenic", "luxury", "relaxed"], 8, 7, (200, 900), False),
    _resort("Val d'Isère", "France", EU, 45.4486, 6.9797, "GVA", ["none"], (16, 40, 28, 16), 65, ["party", "expert"], 6, 9, (150, 600), True),
    _resort("Courchevel", "France", EU, 45.4153, 6.6346, "GVA", ["none"], (25, 40, 25, 10), 70, ["luxury", "family"], 9, 8, (250, 1200), True),
    _resort("St. Anton", "Austria", EU, 47.1275, 10.2636, "INN", ["none"], (15, 40, 30, 15), 65, ["party", "expert"], 6, 10, (120, 500), True),
    _resort("Kitzbühel", "Austria", EU, 47.4492, 12.3925, "INN", ["none"], (25, 45, 20, 10), 60, ["scenic", "luxury", "party"], 8, 9, (130, 500), False),
    _resort("Axamer Lizum", "Austria", EU, 47.1911, 11.2895, "INN", ["none"], (30, 40, 20, 10), 50, ["value", "family"], 6, 5, (80, 250), False),
    _resort("Les Arcs", "France", EU, 45.5728, 6.8039, "GVA", ["none"], (22, 43, 25, 10), 55, ["family", "value"], 6, 6, (100, 400), True),
    _resort("Tignes", "France", EU, 45.4685, 6.9063, "GVA", ["none"], (20, 42, 26, 12), 60, ["party", "value"], 5, 7, (100, 400), True),
    # Japan
    _resort("Niseko", "Japan", JP, 42.8625, 140.6987, "CTS", ["ikon"], (30, 40, 20, 10), 65, ["party", "family", "scenic"], 9, 8, (80, 400), False),
    _resort("Hakuba", "Japan", JP, 36.6983, 137.8321, "NRT", ["epic"], (30, 40, 20, 10), 50, ["value", "scenic", "family"], 8, 6, (60, 250), False),
    _resort("Furano", "Japan", JP, 43.3389, 142.3832, "CTS", ["none"], (40, 40, 15, 5), 45, ["relaxed", "value", "scenic"], 7, 5, (50, 200), False),
    _resort("Nozawa Onsen", "Japan", JP, 36.9270, 138.6252, "NRT", ["none"], (30, 40, 20, 10), 45, ["relaxed", "scenic", "value"], 8, 6, (50, 200), False),
)

RESORTS_BY_NAME: MappingProxyType = MappingProxyType({r.name: r for r in RESORTS})

# Major commercial airport used for flight search, which can differ from the
# closest regional strip in ``ResortProfile.nearest_airport``.
RESORT_AIRPORTS: MappingProxyType = MappingProxyType({
    # North America
    "Whistler Blackcomb": "YVR", "Vail": "DEN", "Park City": "SLC",
    "Jackson Hole": "JAC", "Telluride": "MTJ", "Mammoth Mountain": "MMH",
    "Steamboat": "HDN", "Stowe": "BTV", "Sunday River": "PWM",
    "Killington": "BTV", "Big Sky": "BZN", "Taos Ski Valley": "ABQ",
    "Alta": "SLC", "Snowbird": "SLC", "Arapahoe Basin": "DEN",
    "Banff Sunshine": "YYC", "Lake Louise": "YYC",
    "Mont-Tremblant": "YUL", "Revelstoke": "YLW",
    "Aspen Snowmass": "ASE", "Deer Valley": "SLC",
    "Breckenridge": "DEN", "Copper Mountain": "DEN",
    "Squaw Valley / Palisades": "RNO", "Sun Valley": "SUN",
    "Winter Park": "DEN",
    # Europe
    "Chamonix": "GVA", "Verbier": "GVA", "Zermatt": "GVA",
    "Val d'Isère": "GVA", "Courchevel": "GVA", "St. Anton": "INN",
    "Kitzbühel": "INN", "Axamer Lizum": "INN",
    "Les Arcs": "GVA", "Tignes": "GVA",
    # Japan
    "Niseko": "CTS", "Hakuba": "NRT", "Furano": "CTS", "Nozawa Onsen": "NRT",
})

# Passes reported on every recommendation, checked against ``ResortProfile.passes``.
REFERENCE_PASSES: tuple[str, ...] = ("Ikon", "Epic")

NO_PREFERENCE = "No Preference"


def get_resort(name: str) -> ResortProfile | None:
    return RESORTS_BY_NAME.get(name)


def filter_by_regions(regions: list[str] | None) -> list[ResortProfile]:
    """Resorts in any of ``regions``; all resorts when unset or "No Preference"."""
    if not regions or NO_PREFERENCE in regions:
        return list(RESORTS)
    wanted = set(regions)
    return [r for r in RESORTS if r.region in wanted]


def destination_airports(resort_names: list[str]) -> list[str]:
    """Deduplicated flight-search airports for the given resorts, in first-seen order."""
    seen: dict[str, None] = {}
    for name in resort_names:
        code = RESORT_AIRPORTS.get(name)
        if code:
            seen.setdefault(code, None)
    return list(seen)
