"""Confidential Information Memorandum skeleton.

Pure data assembly: seven fixed sections populated from whatever the caller
supplies, with placeholder copy where a field is missing.
"""
from datetime import date

from quantdesk.deals.formatting import format_compact, format_money, format_percent
from quantdesk.models.deals import (
    CIMRequest, CIMTemplate, CIMSection, CIMSubsection, DataPoint,
)

DISCLAIMER = (
    'This Confidential Information Memorandum ("CIM") has been prepared by the Company and its '
    "advisors solely for use by prospective acquirers in evaluating a potential transaction. "
    "This CIM does not constitute an offer to sell or a solicitation of an offer to buy any "
    "securities. All information herein is strictly confidential and may not be reproduced or "
    "distributed without prior written consent."
)


def _point(label: str, value: str) -> DataPoint:
    return DataPoint(label=label, value=value)


def _executive_summary(req: CIMRequest) -> CIMSection:
    return CIMSection(
        id="executive_summary",
        title="I. Executive Summary",
        icon="📋",
        subsections=[
            CIMSubsection(
                title="Investment Highlights",
                content=(
                    f"{req.company_name} represents a compelling investment opportunity in the "
                    f"{req.industry} sector. {req.description}"
                ),
                data_points=[
                    _point("Industry", req.industry),
                    _point("Founded", str(req.founded_year) if req.founded_year else "N/A"),
                    _point("Headquarters", req.headquarters or "N/A"),
                    _point("Employees", f"{req.employees:,}" if req.employees else "N/A"),
                ],
            ),
            CIMSubsection(
                title="Financial Snapshot",
                content="Key financial metrics demonstrate strong operational performance and growth trajectory.",
                data_points=[
                    _point("Revenue", format_money(req.revenue)),
                    _point("EBITDA", format_money(req.ebitda)),
                    _point("EBITDA Margin", format_percent(req.ebitda_margin)),
                    _point("Revenue Growth", format_percent(req.revenue_growth)),
                ],
            ),
        ],
    )


def _business_overview(req: CIMRequest) -> CIMSection:
    products = (
        f"The company offers a diversified portfolio: {', '.join(req.key_products)}."
        if req.key_products else "Detailed product/service breakdown to be populated."
    )
    advantages = (
        f"Key competitive advantages include: {'; '.join(req.competitive_advantages)}."
        if req.competitive_advantages else "Competitive moat analysis to be populated."
    )
    return CIMSection(
        id="business_overview",
        title="II. Business Overview",
        icon="🏢",
        subsections=[
            CIMSubsection(title="Company Description", content=req.description),
            CIMSubsection(title="Products & Services", content=products),
            CIMSubsection(title="Competitive Positioning", content=advantages),
        ],
    )


def _industry_overview(req: CIMRequest) -> CIMSection:
    return CIMSection(
        id="industry_overview",
        title="III. Industry Overview",
        icon="🌐",
        subsections=[
            CIMSubsection(
                title="Market Size & Dynamics",
                content=(
                    f"The {req.industry} market presents significant opportunities driven by secular "
                    f"growth trends. TAM/SAM/SOM analysis pending detailed market research input."
                ),
            ),
            CIMSubsection(
                title="Competitive Landscape",
                content="Competitive dynamics, market share distribution, and barriers to entry analysis.",
            ),
        ],
    )


def _financial_overview(req: CIMRequest) -> CIMSection:
    history = None
    if req.financial_highlights:
        history = [
            _point(
                f"FY{fh.year}",
                f"Rev: ${format_compact(fh.revenue)} | EBITDA: ${format_compact(fh.ebitda)} "
                f"| NI: ${format_compact(fh.net_income)}",
            )
            for fh in req.financial_highlights
        ]
    return CIMSection(
        id="financial_overview",
        title="IV. Financial Overview",
        icon="📊",
        subsections=[
            CIMSubsection(
                title="Historical Performance",
                content=(
                    "The company has demonstrated consistent financial performance:"
                    if history else "Historical financial data to be populated."
                ),
                data_points=history,
            ),
            CIMSubsection(
                title="Key Financial Metrics",
                content="Detailed margin analysis, capital structure overview, and cash flow quality assessment.",
            ),
        ],
    )


def _management(req: CIMRequest) -> CIMSection:
    if req.management_team:
        content = "\n\n".join(
            f"**{m.name}**, {m.title}" + (f": {m.bio}" if m.bio else "")
            for m in req.management_team
        )
    else:
        content = "Management team profiles to be populated."
    return CIMSection(
        id="management",
        title="V. Management Team",
        icon="👥",
        subsections=[CIMSubsection(title="Senior Leadership", content=content)],
    )


def _growth_strategy() -> CIMSection:
    return CIMSection(
        id="growth_strategy",
        title="VI. Growth Strategy",
        icon="🚀",
        subsections=[
            CIMSubsection(
                title="Organic Growth Initiatives",
                content="Product expansion, geographic penetration, and customer acquisition strategy overview.",
            ),
            CIMSubsection(
                title="Inorganic Growth / M&A Pipeline",
                content="Targeted bolt-on acquisitions and strategic partnership opportunities.",
            ),
        ],
    )


def _transaction() -> CIMSection:
    return CIMSection(
        id="transaction",
        title="VII. Transaction Considerations",
        icon="🤝",
        subsections=[
            CIMSubsection(
                title="Process Overview",
                content=(
                    "This process is being conducted on a confidential basis. Interested parties "
                    "are invited to submit preliminary indications of interest."
                ),
            ),
            CIMSubsection(
                title="Key Transaction Terms",
                content="Structure, timeline, due diligence procedures, and exclusivity provisions to be discussed.",
            ),
        ],
    )


def generate_cim(request: CIMRequest, as_of: date | None = None) -> CIMTemplate:
    return CIMTemplate(
        title=f"Confidential Information Memorandum: {request.company_name}",
        date=(as_of or date.today()).isoformat(),
        disclaimer=DISCLAIMER,
        sections=[
            _executive_summary(request),
            _business_overview(request),
            _industry_overview(request),
            _financial_overview(request),
            _management(request),
            _growth_strategy(),
            _transaction(),
        ],
    )
