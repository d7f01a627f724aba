from datetime import date

from quantdesk.deals.cim import DISCLAIMER, generate_cim
from quantdesk.deals.formatting import format_compact, format_money, format_percent
from quantdesk.models.deals import CIMRequest, FinancialHighlight, ManagementMember


def _make_request(**overrides) -> CIMRequest:
    values = dict(
        company_name="Northwind Logistics",
        industry="Logistics",
        description="Regional freight and warehousing operator.",
    )
    values.update(overrides)
    return CIMRequest(**values)


def _section(cim, section_id: str):
    return next(s for s in cim.sections if s.id == section_id)


def test_section_order():
    cim = generate_cim(_make_request(), as_of=date(2026, 3, 1))
    assert [s.id for s in cim.sections] == [
        "executive_summary", "business_overview", "industry_overview",
        "financial_overview", "management", "growth_strategy", "transaction",
    ]
    assert cim.title == "Confidential Information Memorandum: Northwind Logistics"
    assert cim.date == "2026-03-01"
    assert cim.disclaimer == DISCLAIMER


def test_missing_fields_use_placeholders():
    cim = generate_cim(_make_request())
    summary = _section(cim, "executive_summary")
    points = {p.label: p.value for sub in summary.subsections for p in sub.data_points or []}
    assert points["Founded"] == "N/A"
    assert points["Revenue"] == "N/A"
    assert points["EBITDA Margin"] == "N/A"
    assert _section(cim, "management").subsections[0].content == "Management team profiles to be populated."
    history = _section(cim, "financial_overview").subsections[0]
    assert history.data_points is None
    assert history.content == "Historical financial data to be populated."


def test_populated_fields():
    cim = generate_cim(_make_request(
        founded_year=1998,
        employees=1250,
        revenue=480_000_000,
        ebitda_margin=0.18,
        key_products=["Freight", "Warehousing"],
        competitive_advantages=["Dense network", "Long-term contracts"],
    ))
    points = {
        p.label: p.value
        for sub in _section(cim, "executive_summary").subsections
        for p in sub.data_points or []
    }
    assert points["Founded"] == "1998"
    assert points["Employees"] == "1,250"
    assert points["Revenue"] == "$480.0M"
    assert points["EBITDA Margin"] == "18.0%"
    business = _section(cim, "business_overview").subsections
    assert "Freight, Warehousing" in business[1].content
    assert "Dense network; Long-term contracts" in business[2].content


def test_financial_history_and_management():
    cim = generate_cim(_make_request(
        financial_highlights=[
            FinancialHighlight(year=2024, revenue=400_000_000, ebitda=64_000_000, net_income=21_000_000),
        ],
        management_team=[
            ManagementMember(name="Dana Reyes", title="CEO", bio="20 years in freight."),
            ManagementMember(name="Sam Ortiz", title="CFO"),
        ],
    ))
    history = _section(cim, "financial_overview").subsections[0].data_points
    assert history[0].label == "FY2024"
    assert history[0].value == "Rev: $400.0M | EBITDA: $64.0M | NI: $21.0M"
    content = _section(cim, "management").subsections[0].content
    assert "**Dana Reyes**, CEO: 20 years in freight." in content
    assert content.endswith("**Sam Ortiz**, CFO")


def test_formatting_helpers():
    assert format_compact(2_500_000_000) == "2.5B"
    assert format_compact(45_600) == "45.6K"
    assert format_compact(999) == "999"
    assert format_percent(0.153) == "15.3%"
    assert format_percent(None) == "N/A"
    assert format_money(0) == "N/A"
    assert format_money(3_400_000) == "$3.4M"
