"""
Tests for the pricing calculator.
"""

import pytest

from services import (
    MealSelection, PricingConfig, ValidationError,
    calculate_final_price, validate_selection, valid_meal_combinations, duration_options, whole_number,
)


def make_selection(**overrides):
    data = dict(plan_id='weight-loss', main_meals=1, breakfasts=1, snacks=0,
                days_per_week=3, duration='1-week', promo_code=None)
    data.update(overrides)
    return MealSelection(**data)


def test_muscle_gain_month_scenario(pricing_config):
    selection = make_selection(plan_id='muscle-gain', main_meals=2, breakfasts=1, snacks=0,
                               days_per_week=7, duration='1-month')
    result = calculate_final_price(selection, pricing_config)

    assert result.unit_prices == {'main_meal': 46.0, 'breakfast': 34.5, 'snack': 15.0}
    assert result.daily_cost == 126.5
    assert result.weekly_subtotal == 885.5
    assert result.total_items == 21
    # days (10%) and volume (10%) tie; days is listed first
    assert result.weekly_discount_category == 'days'
    assert result.weekly_discount_rate == 0.1
    assert result.weekly_cost == 796.95
    assert result.week_count == 4
    assert result.duration_discount_rate == 0.1
    assert result.subscription_subtotal == 3187.8
    assert result.subscription_cost == 2869.02
    assert result.duration_discount_amount == 318.78
    assert result.total_savings == 672.98


def test_no_discount_for_smallest_selection(pricing_config):
    result = calculate_final_price(make_selection(), pricing_config)

    assert result.daily_cost == 70.0
    assert result.total_items == 6
    assert result.weekly_discount_category == 'days'
    assert result.weekly_discount_rate == 0.0
    assert result.weekly_cost == 210.0
    assert result.subscription_cost == 210.0
    assert result.total_savings == 0.0
    assert result.price_per_day == 70.0


def test_volume_wins_when_strictly_greater(pricing_config):
    # 5 items/day over 5 days = 25 items (10%) beats 5 days (5%)
    selection = make_selection(main_meals=2, breakfasts=1, snacks=2, days_per_week=5, duration='2-weeks')
    result = calculate_final_price(selection, pricing_config)

    assert result.weekly_discount_category == 'volume'
    assert result.weekly_discount_rate == 0.1
    assert result.daily_cost == 140.0
    assert result.weekly_cost == 630.0
    assert result.subscription_cost == 1197.0
    assert result.total_savings == 203.0
    assert result.price_per_week == 598.5


def test_promo_wins_when_strictly_greater(pricing_config):
    selection = make_selection(days_per_week=7, promo_code='bulk-order')
    result = calculate_final_price(selection, pricing_config)

    assert result.weekly_discount_category == 'promotional'
    assert result.weekly_discount_rate == 0.25
    assert result.weekly_cost == pytest.approx(70 * 7 * 0.75)


def test_promo_tie_keeps_earlier_category(pricing_config):
    # summer is 10%, same as the 7-day rate
    selection = make_selection(days_per_week=7, promo_code='summer')
    result = calculate_final_price(selection, pricing_config)

    assert result.weekly_discount_category == 'days'
    assert result.weekly_discount_rate == 0.1


def test_discounts_are_not_stacked(pricing_config):
    selection = make_selection(main_meals=2, breakfasts=1, snacks=2, days_per_week=7,
                               promo_code='new-customer')
    result = calculate_final_price(selection, pricing_config)

    # days 10%, volume 10%, promo 20%: only the promo applies
    assert result.weekly_discount_rate == 0.2
    assert result.weekly_discount_amount == pytest.approx(result.weekly_subtotal * 0.2, abs=0.01)


def test_unknown_promo_code_gives_no_discount(pricing_config):
    result = calculate_final_price(make_selection(promo_code='FREE-LUNCH'), pricing_config)
    assert result.weekly_discount_rate == 0.0


def test_promo_code_is_case_insensitive(pricing_config):
    result = calculate_final_price(make_selection(promo_code='Ramadan'), pricing_config)
    assert result.weekly_discount_category == 'promotional'
    assert result.weekly_discount_rate == 0.15


def test_snacks_ignore_plan_multiplier(pricing_config):
    selection = make_selection(plan_id='keto', snacks=1)
    result = calculate_final_price(selection, pricing_config)

    assert result.unit_prices['snack'] == 15.0
    assert result.unit_prices['main_meal'] == 44.0
    assert result.daily_cost == 44.0 + 33.0 + 15.0


@pytest.mark.parametrize('duration,weeks,rate', [
    ('1-week', 1, 0.0),
    ('2-weeks', 2, 0.05),
    ('1-month', 4, 0.1),
])
@pytest.mark.parametrize('overrides', [
    {},
    {'main_meals': 2, 'breakfasts': 1, 'snacks': 2, 'days_per_week': 5},
    {'days_per_week': 7, 'promo_code': 'bulk-order'},
])
def test_duration_discount_applies_on_top(pricing_config, duration, weeks, rate, overrides):
    result = calculate_final_price(make_selection(duration=duration, **overrides), pricing_config)

    assert result.week_count == weeks
    assert result.duration_discount_rate == rate
    assert result.subscription_cost == pytest.approx(result.weekly_cost * weeks * (1 - rate), abs=0.01)


def test_all_violations_are_reported(pricing_config):
    selection = make_selection(plan_id='paleo', main_meals=0, breakfasts=1, snacks=5,
                               days_per_week=2, duration='3-weeks')
    with pytest.raises(ValidationError) as excinfo:
        calculate_final_price(selection, pricing_config)

    errors = excinfo.value.errors
    assert len(errors) == 6
    assert any('at least 2 meals' in e for e in errors)
    assert any('combination' in e for e in errors)
    assert any('snacks' in e for e in errors)
    assert any('at least 3 delivery days' in e for e in errors)
    assert any('paleo' in e for e in errors)
    assert any('duration' in e for e in errors)


def test_single_violation_is_reported_alone(pricing_config):
    errors = validate_selection(make_selection(days_per_week=8), pricing_config)
    assert errors == ['Cannot select more than 7 days per week']


@pytest.mark.parametrize('main_meals,breakfasts', [(1, 1), (2, 0), (2, 1)])
def test_allowed_meal_combinations(pricing_config, main_meals, breakfasts):
    selection = make_selection(main_meals=main_meals, breakfasts=breakfasts)
    assert validate_selection(selection, pricing_config) == []


@pytest.mark.parametrize('main_meals,breakfasts', [(0, 2), (3, 0), (1, 0), (2, 2)])
def test_rejected_meal_combinations(pricing_config, main_meals, breakfasts):
    selection = make_selection(main_meals=main_meals, breakfasts=breakfasts)
    assert validate_selection(selection, pricing_config)


def test_config_is_injectable():
    config = PricingConfig.build(
        base_prices={'main_meal': 50, 'breakfast': 20, 'snack': 10},
        plan_multipliers={'basic': 1},
        days_tiers=((3, 7, '0'),),
        volume_tiers=((0, None, '0'),),
        durations={'1-week': (1, '0')},
        promo_codes={},
    )
    result = calculate_final_price(make_selection(plan_id='basic'), config)

    assert result.daily_cost == 70.0
    assert result.subscription_cost == 210.0
    assert validate_selection(make_selection(plan_id='weight-loss'), config) == ['Unknown plan: \'weight-loss\'']


def test_config_is_immutable(pricing_config):
    with pytest.raises(Exception):
        pricing_config.main_meal_price = 1
    with pytest.raises(TypeError):
        pricing_config.promo_codes['free'] = 1


def test_selection_from_dict_rejects_non_numbers():
    with pytest.raises(ValidationError) as excinfo:
        MealSelection.from_dict({'plan_id': 'keto', 'main_meals': 'two', 'breakfasts': None,
                                 'snacks': 0, 'days_per_week': 5, 'duration': '1-week'})
    assert excinfo.value.errors == ['main_meals must be a whole number', 'breakfasts must be a whole number']


def test_selection_from_dict():
    selection = MealSelection.from_dict({'plan_id': 'keto', 'main_meals': '2', 'breakfasts': 1,
                                         'days_per_week': 5, 'duration': '2-weeks'})
    assert selection == MealSelection('keto', 2, 1, 0, 5, '2-weeks', None)


def test_options_catalogue(pricing_config):
    combos = {(c['main_meals'], c['breakfasts']) for c in valid_meal_combinations()}
    assert combos == {(1, 1), (2, 0), (2, 1)}

    options = {o['duration']: o for o in duration_options(pricing_config)}
    assert options['1-month']['weeks'] == 4
    assert options['2-weeks']['discount'] == 0.05


def test_selection_from_dict_rejects_fractions():
    with pytest.raises(ValidationError) as excinfo:
        MealSelection.from_dict({'plan_id': 'keto', 'main_meals': 2, 'breakfasts': 1,
                                 'snacks': True, 'days_per_week': 7.9, 'duration': '1-week'})
    assert excinfo.value.errors == ['snacks must be a whole number', 'days_per_week must be a whole number']


@pytest.mark.parametrize('raw, expected', [(3, 3), (3.0, 3), (' 4 ', 4), ('-2', -2)])
def test_whole_number_accepts(raw, expected):
    assert whole_number(raw) == expected


@pytest.mark.parametrize('raw', [2.5, '2.5', 'two', None, False, [3]])
def test_whole_number_rejects(raw):
    with pytest.raises((ValueError, TypeError)):
        whole_number(raw)
