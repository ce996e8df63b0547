import pytest

from app.core.enums import PricingModel
from app.core.exceptions import ExtraServiceNotConfigured
from app.data.reference import EXTRA_SERVICES
from app.schemas.pricing import ExtraServiceOut, ExtraServiceSelection
from app.services.extras import ExtrasCalculator, flat_cost, per_unit_cost, percentage_cost


@pytest.fixture
def calculator():
    return ExtrasCalculator(EXTRA_SERVICES)


class TestPricingModels:

    def test_flat(self):
        assert flat_cost(200.0, True) == 200.0
        assert flat_cost(200.0, False) == 0.0

    def test_per_unit(self):
        assert per_unit_cost(150.0, 3) == 450.0
        assert per_unit_cost(150.0, 0) == 0.0

    def test_percentage(self):
        assert percentage_cost(5, 10000) == 500.0
        assert percentage_cost(5, 0) == 0.0
        # 1234.56 * 5% = 61.728
        assert percentage_cost(5, 1234.56) == 61.73


class TestExtrasCalculator:

    def test_no_extras(self, calculator):
        extras = calculator.calculate(ExtraServiceSelection())

        assert extras.total == 0
        assert all(cost == 0 for cost in extras.model_dump().values())

    @pytest.mark.parametrize("people,expected", [
        (None, 350.0),
        (0, 350.0),
        (1, 350.0),
        (2, 700.0),
        (5, 1750.0),
    ])
    def test_loading_people(self, calculator, people, expected):
        extras = calculator.calculate(ExtraServiceSelection(loading=True, loading_people=people))
        assert extras.loading == expected

    def test_loading_people_ignored_without_loading(self, calculator):
        extras = calculator.calculate(ExtraServiceSelection(loading=False, loading_people=4))
        assert extras.loading == 0.0

    def test_stairs(self, calculator):
        assert calculator.calculate(ExtraServiceSelection(stairs=3)).stairs == 450.0
        assert calculator.calculate(ExtraServiceSelection(stairs=0)).stairs == 0.0

    def test_flat_extras(self, calculator):
        extras = calculator.calculate(ExtraServiceSelection(packing=True, cleaning=True, express=True))

        assert extras.packing == 200.0
        assert extras.cleaning == 500.0
        assert extras.express == 500.0
        assert extras.total == 1200.0

    def test_insurance(self, calculator):
        extras = calculator.calculate(ExtraServiceSelection(insurance=True, insurance_value=10000))
        assert extras.insurance == 500.0

    def test_insurance_without_value(self, calculator):
        extras = calculator.calculate(ExtraServiceSelection(insurance=True))
        assert extras.insurance == 0.0

    def test_insurance_value_without_insurance(self, calculator):
        extras = calculator.calculate(ExtraServiceSelection(insurance=False, insurance_value=10000))
        assert extras.insurance == 0.0

    def test_waiting_time(self, calculator):
        assert calculator.calculate(ExtraServiceSelection(waiting_time=3)).waiting_time == 300.0
        assert calculator.calculate(ExtraServiceSelection(waiting_time=None)).waiting_time == 0.0

    def test_total_is_sum_of_items(self, calculator):
        selection = ExtraServiceSelection(
            loading=True, loading_people=2, stairs=1, packing=True, cleaning=True,
            express=True, insurance=True, insurance_value=8000, waiting_time=2,
        )
        extras = calculator.calculate(selection)

        # 700 + 150 + 200 + 500 + 500 + 400 + 200
        assert extras.total == 2650.0
        assert extras.total == sum(extras.model_dump().values())

    def test_uses_configured_prices(self):
        definitions = [
            d.model_copy(update={"price": d.price * 2}) if d.code == "STAIRS" else d
            for d in EXTRA_SERVICES
        ]
        calculator = ExtrasCalculator(definitions)
        assert calculator.calculate(ExtraServiceSelection(stairs=2)).stairs == 600.0


class TestExtrasConfiguration:

    @pytest.mark.parametrize("code", ["LOADING", "STAIRS", "PACKING", "CLEANING", "EXPRESS", "INSURANCE", "WAITING"])
    def test_missing_definition(self, code):
        definitions = [d for d in EXTRA_SERVICES if d.code != code]

        with pytest.raises(ExtraServiceNotConfigured) as exc_info:
            ExtrasCalculator(definitions)
        assert exc_info.value.code == code

    def test_wrong_pricing_model(self):
        definitions = [d for d in EXTRA_SERVICES if d.code != "INSURANCE"]
        definitions.append(ExtraServiceOut(
            id="insurance", code="INSURANCE", name="Insurance",
            price_type=PricingModel.FLAT, price=250,
        ))

        with pytest.raises(ExtraServiceNotConfigured) as exc_info:
            ExtrasCalculator(definitions)
        assert "expected percentage" in str(exc_info.value)

    def test_unknown_definitions_are_ignored(self):
        definitions = list(EXTRA_SERVICES) + [ExtraServiceOut(
            id="piano", code="PIANO", name="Piano moving",
            price_type=PricingModel.FLAT, price=1500,
        )]
        calculator = ExtrasCalculator(definitions)
        assert calculator.calculate(ExtraServiceSelection()).total == 0
