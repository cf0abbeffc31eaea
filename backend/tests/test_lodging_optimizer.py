import pytest

from app.data.lodging import HOTEL, RENTAL, LodgingOption
from app.services.lodging_optimizer import (
    calculate_optimal_split,
    compute_split,
    generate_lodging,
    lodging_options_for,
    optimize_for_resorts,
    preference_type,
)


class TestComputeSplit:
    def test_five_guests_in_four_bed_units(self):
        """5 guests, sleeps 4, $200/night, 6 nights."""
        option = LodgingOption("Condo", RENTAL, False, 200, 4)
        split = compute_split(option, group_size=5, nights=6)
        assert split.units == 2
        assert split.total_cost == 2400
        assert split.cost_per_person == 480

    def test_cost_per_person_rounds_half_up(self):
        option = LodgingOption("Inn", HOTEL, False, 125, 4)
        assert compute_split(option, group_size=4, nights=2).cost_per_person == 63

    def test_cost_per_person_rounds_down_below_half(self):
        option = LodgingOption("Inn", HOTEL, False, 100, 2)
        assert compute_split(option, group_size=3, nights=1).cost_per_person == 67

    def test_single_guest_in_big_rental(self):
        option = LodgingOption("Chalet", RENTAL, False, 900, 10)
        split = compute_split(option, group_size=1, nights=3)
        assert (split.units, split.total_cost, split.cost_per_person) == (1, 2700, 2700)


class TestPreference:
    @pytest.mark.parametrize("pref,expected", [
        ("Hotel", HOTEL),
        ("hotel", HOTEL),
        ("Airbnb", RENTAL),
        ("Rental", RENTAL),
        ("No Preference", None),
        ("", None),
        (None, None),
    ])
    def test_preference_type(self, pref, expected):
        assert preference_type(pref) == expected


class TestCalculateOptimalSplit:
    def test_hotel_preference_at_vail(self):
        splits = calculate_optimal_split(lodging_options_for("Vail"), 4, "Hotel", 5)
        assert [s.option.name for s in splits] == ["Lodge at Vail", "Four Seasons Vail"]
        assert splits[0].cost_per_person == 950

    def test_rental_preference_at_vail(self):
        splits = calculate_optimal_split(lodging_options_for("Vail"), 4, "Airbnb", 5)
        assert splits[0].option.name == "Lionshead Village 2BR"
        assert splits[0].cost_per_person == 500
        assert all(s.option.type == RENTAL for s in splits)

    def test_no_preference_keeps_every_option_sorted(self):
        splits = calculate_optimal_split(lodging_options_for("Vail"), 4, "No Preference", 5)
        assert len(splits) == 4
        costs = [s.cost_per_person for s in splits]
        assert costs == sorted(costs)

    def test_no_matching_option_is_empty_not_error(self):
        rentals = [LodgingOption("Cabin", RENTAL, False, 300, 6)]
        assert calculate_optimal_split(rentals, 4, "Hotel", 3) == []


class TestGenerateLodging:
    def test_synthesized_options_scale_from_range(self):
        options = generate_lodging("Nowhere Peak", (150, 451))
        by_suffix = {o.name.removeprefix("Nowhere Peak "): o for o in options}

        assert by_suffix["Slopeside Hotel"].price_per_night == 451
        assert by_suffix["Slopeside Hotel"].slopeside is True
        assert by_suffix["Town Hotel"].price_per_night == 301
        assert by_suffix["Large Chalet"].price_per_night == 677
        assert by_suffix["Large Chalet"].sleeps == 10
        assert by_suffix["Condo 3BR"].sleeps == 6

    def test_curated_catalog_wins_over_range(self):
        assert lodging_options_for("Chamonix", (1, 2))[0].name == "Grand Hotel des Alpes"


class TestOptimizeForResorts:
    def test_missing_range_uses_default(self):
        result = optimize_for_resorts([("Alta", None)], group_size=6, preference="Rental", nights=4)
        best = result["Alta"].best
        assert best.option.name == "Alta Condo 3BR"
        assert best.option.price_per_night == 250
        assert best.cost_per_person == 167

    def test_payload_shape(self):
        result = optimize_for_resorts([("Vail", (250, 1000))], 4, "Hotel", 5)
        payload = result["Vail"].to_dict()
        assert len(payload["options"]) == 4
        assert payload["bestSplits"][0] == {
            "option": {
                "name": "Lodge at Vail",
                "type": "hotel",
                "slopeside": True,
                "pricePerNight": 380,
                "sleeps": 2,
            },
            "units": 2,
            "totalCost": 3800,
            "costPerPerson": 950,
        }

