"""Static airline names and alliance membership.

Used for:
- alliance filtering of flight offers (flight_service.filter_by_alliance)
- human-readable carrier names in the reasoning prompt
"""

ONEWORLD: frozenset[str] = frozenset({
    "AA", "BA", "QF", "CX", "JL", "QR", "IB", "AY", "AS", "MH", "RJ", "UL", "AT",
})

STAR_ALLIANCE: frozenset[str] = frozenset({
    "AC", "UA", "LH", "NH", "SQ", "TK", "SK", "LX", "OS", "LO", "TP", "OZ",
    "AI", "BR", "NZ", "SN", "ET", "MS", "CA", "A3", "OU", "CM", "AV", "ZH", "TG", "SA",
})

SKYTEAM: frozenset[str] = frozenset({
    "DL", "AF", "KL", "KE", "AZ", "AM", "AR", "CI", "MU", "GA", "ME", "SV", "VN", "RO", "UX", "KQ", "MF",
})

ALLIANCE_CARRIERS: frozenset[str] = ONEWORLD | STAR_ALLIANCE | SKYTEAM

AIRLINE_NAMES: dict[str, str] = {
    "AC": "Air Canada", "WS": "WestJet", "AA": "American Airlines",
    "DL": "Delta Air Lines", "UA": "United Airlines", "B6": "JetBlue Airways",
    "NK": "Spirit Airlines", "F8": "Flair Airlines", "BA": "British Airways",
    "LH": "Lufthansa", "AF": "Air France", "KL": "KLM",
    "LX": "Swiss", "OS": "Austrian", "EK": "Emirates",
    "QR": "Qatar Airways", "SQ": "Singapore Airlines", "CX": "Cathay Pacific",
    "NH": "ANA", "JL": "Japan Airlines", "AS": "Alaska Airlines",
    "WN": "Southwest Airlines", "TS": "Air Transat", "PD": "Porter Airlines",
    "VS": "Virgin Atlantic", "FI": "Icelandair", "TP": "TAP Air Portugal",
    "AY": "Finnair", "SK": "SAS", "IB": "Iberia", "G4": "Allegiant Air",
    "F9": "Frontier Airlines", "HA": "Hawaiian Airlines", "TK": "Turkish Airlines",
}


def is_alliance_carrier(airline_code: str) -> bool:
    return airline_code in ALLIANCE_CARRIERS


def airline_name(airline_code: str) -> str:
    return AIRLINE_NAMES.get(airline_code, airline_code)
