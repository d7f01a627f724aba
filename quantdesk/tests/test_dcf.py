import math

import pytest

from quantdesk.errors import MissingProjectionsError, NonConvergentGrowthError
from quantdesk.models.valuations import DCFInputs, SensitivityRange
from quantdesk.valuation.dcf import compute_dcf_valuation, compute_sensitivity_table


def test_basic_dcf(dcf_inputs):
    result = compute_dcf_valuation(dcf_inputs)

    fcfs = dcf_inputs.free_cash_flows
    expected_pv = sum(f / 1.1 ** (i + 1) for i, f in enumerate(fcfs))
    expected_tv = 146 * 1.025 / (0.10 - 0.025)

    assert result.pv_of_cash_flows == pytest.approx(expected_pv)
    assert result.terminal_value == pytest.approx(expected_tv)
    assert result.pv_of_terminal_value == pytest.approx(expected_tv / 1.1 ** 5)
    assert result.enterprise_value == pytest.approx(expected_pv + expected_tv / 1.1 ** 5)
    assert result.equity_value == pytest.approx(result.enterprise_value - 200)
    assert result.implied_share_price == pytest.approx(result.equity_value / 50)


def test_yearly_pvs(dcf_inputs):
    result = compute_dcf_valuation(dcf_inputs)
    assert [y.year for y in result.yearly_pvs] == [1, 2, 3, 4, 5]
    assert result.yearly_pvs[0].discount_factor == pytest.approx(1 / 1.1)
    assert sum(y.pv for y in result.yearly_pvs) == pytest.approx(result.pv_of_cash_flows)


def test_wacc_less_than_tgr(dcf_inputs):
    with pytest.raises(NonConvergentGrowthError):
        compute_dcf_valuation(dcf_inputs.model_copy(update={"wacc": 0.02}))


def test_wacc_equal_tgr(dcf_inputs):
    with pytest.raises(NonConvergentGrowthError, match="WACC"):
        compute_dcf_valuation(dcf_inputs.model_copy(update={"wacc": 0.025}))


def test_no_projections(dcf_inputs):
    with pytest.raises(MissingProjectionsError):
        compute_dcf_valuation(dcf_inputs.model_copy(update={"free_cash_flows": []}))


def test_no_share_count():
    result = compute_dcf_valuation(DCFInputs(
        free_cash_flows=[50], wacc=0.12, terminal_growth_rate=0.03,
    ))
    assert result.implied_share_price is None
    assert result.equity_value == result.enterprise_value


def test_sensitivity_grid_shape(dcf_inputs):
    result = compute_sensitivity_table(
        dcf_inputs,
        SensitivityRange(min=0.08, max=0.12, steps=5),
        SensitivityRange(min=0.01, max=0.03, steps=3),
    )
    assert result.wacc_values == pytest.approx([0.08, 0.09, 0.10, 0.11, 0.12])
    assert result.growth_values == pytest.approx([0.01, 0.02, 0.03])
    assert len(result.matrix) == 5
    assert all(len(row) == 3 for row in result.matrix)
    assert all(math.isfinite(v) for row in result.matrix for v in row)


def test_sensitivity_price_falls_with_wacc(dcf_inputs):
    result = compute_sensitivity_table(
        dcf_inputs,
        SensitivityRange(min=0.08, max=0.12, steps=5),
        SensitivityRange(min=0.01, max=0.03, steps=3),
    )
    for j in range(3):
        column = [row[j] for row in result.matrix]
        assert all(a > b for a, b in zip(column, column[1:]))


def test_sensitivity_marks_non_convergent_cells(dcf_inputs):
    result = compute_sensitivity_table(
        dcf_inputs,
        SensitivityRange(min=0.06, max=0.10, steps=3),
        SensitivityRange(min=0.02, max=0.10, steps=5),
    )
    for i, w in enumerate(result.wacc_values):
        for j, g in enumerate(result.growth_values):
            assert math.isnan(result.matrix[i][j]) == (w <= g)


def test_sensitivity_single_step_axis(dcf_inputs):
    result = compute_sensitivity_table(
        dcf_inputs,
        SensitivityRange(min=0.09, max=0.12, steps=1),
        SensitivityRange(min=0.02, max=0.03, steps=2),
    )
    assert result.wacc_values == [0.09]
    assert len(result.matrix) == 1


def test_sensitivity_base_case(dcf_inputs):
    result = compute_sensitivity_table(
        dcf_inputs,
        SensitivityRange(min=0.08, max=0.12, steps=3),
        SensitivityRange(min=0.01, max=0.03, steps=3),
    )
    assert result.base_case.wacc == 0.10
    assert result.base_case.growth == 0.025
    assert result.base_case.price == pytest.approx(compute_dcf_valuation(dcf_inputs).implied_share_price)


def test_sensitivity_non_convergent_base_case(dcf_inputs):
    with pytest.raises(NonConvergentGrowthError):
        compute_sensitivity_table(
            dcf_inputs.model_copy(update={"wacc": 0.02}),
            SensitivityRange(min=0.08, max=0.12, steps=3),
            SensitivityRange(min=0.01, max=0.03, steps=3),
        )
