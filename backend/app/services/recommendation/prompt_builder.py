"""Prompt builder — turns the gathered trip data into the reasoning-model request.

The user message has fixed sections: trip details, guests, resorts with snow,
lodging, flights. A section whose data could not be gathered says so in plain
words so the model flags it instead of inventing numbers.
"""

import logging

from app.data.airlines import airline_name
from app.schemas.flight import FlightOffer, FlightPicks, parse_duration
from app.services.flight_service import FlightSearchResult
from app.services.lodging_optimizer import ResortLodging
from app.services.recommendation.config import recommendation_config
from app.services.recommendation.context_assembler import GuestRecord, TripRequest
from app.services.recommendation.prompts import load_prompt
from app.services.snow_service import CurrentSnow, ResortConditions

logger = logging.getLogger(__name__)

cfg = recommendation_config.prompt

_PLANNER_PROMPT = load_prompt("ski_trip_planner.md")

NO_LODGING = "No lodging data available. Please estimate and mention it in warnings."
NO_FLIGHTS = "No flight data available"


def build_system_prompt() -> str:
    # Plain replace: the template is full of JSON braces.
    return _PLANNER_PROMPT.replace("{count}", str(cfg.recommendation_count))


def build_user_prompt(
    trip: TripRequest,
    guests: list[GuestRecord],
    resorts: list[ResortConditions],
    lodging: dict[str, ResortLodging] | None,
    flights: FlightSearchResult | None,
    flight_note: str | None = None,
) -> str:
    sections = [
        "## Trip Details",
        _trip_lines(trip),
        "",
        "## Guests",
        _guest_lines(guests),
        "",
        "## Available Resorts with Snow Data",
        "\n".join(resort_line(r) for r in resorts) or "No resorts match the geography filter.",
        "",
        "## Lodging Options",
        _lodging_lines(lodging),
        "",
        "## Flight Options",
        _flight_lines(flights, guests, flight_note),
        "",
        f"Please recommend the top {cfg.recommendation_count} resorts for this group.",
    ]
    return "\n".join(sections)


# ---------- Sections ----------


def _trip_lines(trip: TripRequest) -> str:
    vibe = trip.vibe_settings
    budget_scope = "per person" if trip.budget_type == "per_person" else "total"
    budget = f"${trip.budget_amount:.0f} {budget_scope}" if trip.budget_amount is not None else "not set"
    lines = [
        f"- Name: {trip.trip_name}",
        f"- Dates: {trip.date_start or 'flexible'} to {trip.date_end or 'flexible'} ({trip.nights} nights)",
        f"- Group size: {trip.group_size}",
        f"- Geography preference: {', '.join(trip.geography) or 'No preference'}",
        f"- Vibe: Energy {vibe['energy']}/100 (0=relaxed, 100=party), "
        f"Budget {vibe['budget']}/100 (0=value, 100=luxury), "
        f"Skill {vibe['skill']}/100, Ski-in/out: {vibe['ski-in-out']}",
        f"- Skill range: {trip.skill_min or 'any'} to {trip.skill_max or 'any'}",
        f"- Budget: {budget}",
        f"- Pass types: {', '.join(trip.pass_types) or 'None'}",
        f"- Lodging preference: {trip.lodging_preference or 'No preference'}",
    ]
    return "\n".join(lines)


def _money(value: float | None) -> str:
    return f"${value:.0f}" if value is not None else "?"


def _guest_lines(guests: list[GuestRecord]) -> str:
    if not guests:
        return "No guests submitted yet."
    lines = []
    for g in guests[: cfg.max_guests]:
        airports = "/".join(g.airports) or "unknown"
        lines.append(
            f"- {g.name}: from {g.origin_city or 'unknown'} (airport: {airports}), "
            f"skill: {g.skill_level or 'unknown'}, "
            f"budget: {_money(g.budget_min)}-{_money(g.budget_max)}"
        )
    if len(guests) > cfg.max_guests:
        lines.append(f"- ...and {len(guests) - cfg.max_guests} more guests")
    return "\n".join(lines)


def resort_line(resort: ResortConditions) -> str:
    """One line per resort: profile facts plus its snow snapshot."""
    p = resort.profile
    t = p.terrain
    snow = resort.snow
    if isinstance(snow, CurrentSnow):
        snow_str = (
            f"Snow depth: {snow.depth}cm, 24h snowfall: {snow.last_24h_snowfall}cm, "
            f"7-day snowfall: {snow.last_7d_snowfall}cm, "
            f"season total: {snow.season_total_snowfall}cm"
        )
    else:
        snow_str = (
            f"Avg snow depth: {snow.avg_depth}cm, snowfall over trip window: "
            f"{snow.total_snowfall}cm (historical, last completed season)"
        )
    return (
        f"- {p.name} ({p.country}): Pass: {'/'.join(sorted(p.passes)) or 'none'}, "
        f"Terrain: {t.beginner}%beg/{t.intermediate}%int/{t.advanced}%adv/{t.expert}%exp, "
        f"Lift: ${p.lift_ticket}, {snow_str}, "
        f"Après: {p.apres_score}/10, Non-skier: {p.non_skier_score}/10, "
        f"Ski-in/out: {str(p.ski_in_out).lower()}, Vibes: {', '.join(p.vibe_tags)}"
    )


def _lodging_lines(lodging: dict[str, ResortLodging] | None) -> str:
    if not lodging:
        return NO_LODGING
    lines = []
    for name, data in lodging.items():
        best = data.best
        if best is None:
            lines.append(f"- {name}: no lodging data")
            continue
        opt = best.option
        lines.append(
            f"- {name}: {opt.name} ({opt.type}, ${opt.price_per_night}/night, "
            f"{best.units} units needed, ${best.cost_per_person}/person total)"
        )
    return "\n".join(lines)


def _duration_str(iso: str) -> str:
    minutes = parse_duration(iso)
    if not minutes:
        return "?"
    return f"{minutes // 60}h{minutes % 60:02d}m"


def _stops_str(stops: int) -> str:
    return "nonstop" if stops == 0 else f"{stops} stop{'s' if stops > 1 else ''}"


def offer_summary(offer: FlightOffer) -> str:
    airlines = ", ".join(airline_name(code) for code in offer.airlines) or "unknown airline"
    return (
        f"${offer.price:.0f} {offer.currency} ({airlines}), "
        f"out {_stops_str(offer.outbound.stops)} {_duration_str(offer.outbound.duration)}, "
        f"back {_stops_str(offer.return_leg.stops)} {_duration_str(offer.return_leg.duration)}"
    )


def _picks_summary(picks: FlightPicks | None) -> str:
    if picks is None or picks.cheapest is None:
        return "no flights found"
    text = f"cheapest {offer_summary(picks.cheapest)}"
    if picks.most_direct is not None:
        text += f"; most direct {offer_summary(picks.most_direct)}"
    return text


def _flight_lines(
    flights: FlightSearchResult | None,
    guests: list[GuestRecord],
    note: str | None,
) -> str:
    if flights is None or not flights.flights:
        reason = note or "flight search returned nothing"
        return f"{NO_FLIGHTS} ({reason}). Estimate flight costs from origin cities and add a warning."
    if all(picks is None for row in flights.flights.values() for picks in row.values()):
        return (
            f"{NO_FLIGHTS} (no offers returned for any route). "
            "Estimate flight costs from origin cities and add a warning."
        )

    travellers: dict[str, list[str]] = {}
    for g in guests:
        for airport in g.airports:
            travellers.setdefault(airport, []).append(g.name)

    airport_resorts: dict[str, list[str]] = {}
    for resort, airport in flights.resort_airports.items():
        airport_resorts.setdefault(airport, []).append(resort)

    lines = []
    for origin, row in flights.flights.items():
        who = ", ".join(travellers.get(origin, [])) or "guest"
        for dest, picks in row.items():
            if origin == dest:
                continue
            serves = ", ".join(airport_resorts.get(dest, []))
            lines.append(f"- {origin} → {dest} [{serves}] for {who}: {_picks_summary(picks)}")

    if not lines:
        return f"{NO_FLIGHTS} (all guests fly from resort airports)."
    if len(lines) > cfg.max_flight_lines:
        logger.info(f"Truncating flight summary from {len(lines)} to {cfg.max_flight_lines} lines")
        dropped = len(lines) - cfg.max_flight_lines
        lines = lines[: cfg.max_flight_lines] + [f"- ...{dropped} more routes omitted"]
    return "\n".join(lines)
