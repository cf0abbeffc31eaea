from app.schemas.recommendation import GuestFlightDetail, Recommendation, RecommendationSet, Terrain
from app.services.recommendation.enrichment import build_flight_summary, enrich, pass_coverage
from app.data.resorts import get_resort


def _rec(name, flights=()):
    return Recommendation(
        resort_name=name,
        match_score=80,
        terrain_breakdown=Terrain(beginner=1, intermediate=1, advanced=1, expert=97),
        country="Atlantis",
        ski_in_out=False,
        flight_details_per_guest=[
            GuestFlightDetail(guest_name=g, origin=o, estimated_cost=c) for g, o, c in flights
        ],
    )


class TestEnrich:
    def test_catalog_values_override_model(self):
        result = enrich(RecommendationSet(recommendations=[_rec("Vail")]))
        vail = result.recommendations[0]
        profile = get_resort("Vail")

        assert vail.terrain_breakdown.expert == profile.terrain.expert
        assert vail.country == "USA"
        assert vail.region == "North America"
        assert vail.ski_in_out is True

    def test_pass_coverage_against_reference_passes(self):
        coverage = pass_coverage(get_resort("Jackson Hole"))
        assert [(p.pass_name, p.covered) for p in coverage] == [("Ikon Pass", True), ("Epic Pass", False)]

    def test_pass_coverage_serialises_as_pass_key(self):
        dumped = enrich(RecommendationSet(recommendations=[_rec("Vail")])).model_dump(by_alias=True)
        coverage = dumped["recommendations"][0]["passCoverage"]
        assert coverage == [{"pass": "Ikon Pass", "covered": False}, {"pass": "Epic Pass", "covered": True}]

    def test_unknown_resort_left_alone(self):
        rec = _rec("Mount Imaginary")
        result = enrich(RecommendationSet(recommendations=[rec]))
        assert result.recommendations[0].country == "Atlantis"
        assert result.recommendations[0].pass_coverage == []


class TestFlightSummary:
    def test_transposes_guest_costs(self):
        recs = [
            _rec("Vail", [("Ana", "JFK", 380.0), ("Ben", "SFO", 240.0)]),
            _rec("Alta", [("Ana", "JFK", 410.0), ("Ben", "SFO", None)]),
        ]
        assert build_flight_summary(recs) == {
            "Ana (JFK)": {"Vail": 380.0, "Alta": 410.0},
            "Ben (SFO)": {"Vail": 240.0, "Alta": None},
        }

    def test_summary_attached_on_enrich(self):
        result = enrich(RecommendationSet(recommendations=[_rec("Vail", [("Ana", "JFK", 380.0)])]))
        assert result.model_dump(by_alias=True)["flightSummary"] == {"Ana (JFK)": {"Vail": 380.0}}
