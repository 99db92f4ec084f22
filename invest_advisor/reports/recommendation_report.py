"""
REPORTING - RECOMMENDATION SUMMARY

Human-readable summary of an analysis, amounts in rupees.
"""

from typing import Dict, List

from invest_advisor.domain.models import AnalysisResult, InvestmentProfile, StrategyType


def format_inr(amount: float, decimals: int = 0) -> str:
    """
    Format with Indian digit grouping: 1234567.8 -> ₹12,34,568
    """
    negative = amount < 0
    text = f"{abs(amount):.{decimals}f}"
    whole, _, fraction = text.partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    formatted = f"₹{whole}" + (f".{fraction}" if fraction else "")
    return f"-{formatted}" if negative else formatted


def build_recommendation_report(profile: InvestmentProfile, result: AnalysisResult) -> Dict:
    if profile is None or result is None:
        raise ValueError("Profile and analysis result are required")

    rate = result.exchange_rate
    rec = result.recommendation

    return {
        "summary": {
            "capital": format_inr(profile.capital_amount * rate),
            "target": format_inr(profile.target_growth * rate),
            "investment_period_years": profile.investment_period,
            "risk_tolerance": profile.risk_tolerance.value,
            "exchange_rate": rate,
        },
        "allocation": [
            {"name": a.name, "percentage": a.percentage, "amount": format_inr(a.amount)}
            for a in rec.asset_allocation
        ],
        "securities": [
            {
                "symbol": s.symbol,
                "name": s.name,
                "allocation": s.allocation,
                "price": format_inr(s.price_in_inr or 0, decimals=2),
                "change_pct": s.price_change_percent,
                "source": s.price_source,
            }
            for s in rec.specific_recommendations
        ],
        "strategy": {
            "type": rec.strategy.type.value,
            "monthly_amount": (
                format_inr(rec.strategy.monthly_amount)
                if rec.strategy.monthly_amount is not None else None
            ),
            "rationale": rec.strategy.rationale,
        },
        "risk": {
            "score": rec.risk_assessment.score,
            "description": rec.risk_assessment.description,
        },
        "process_guide": list(rec.process_guide),
    }


def render_text_report(profile: InvestmentProfile, result: AnalysisResult) -> str:
    report = build_recommendation_report(profile, result)
    summary = report["summary"]
    strategy = report["strategy"]

    lines: List[str] = [
        "INVESTMENT RECOMMENDATION",
        "=" * 40,
        f"Capital: {summary['capital']}  Target: {summary['target']}",
        f"Horizon: {summary['investment_period_years']} years  Risk: {summary['risk_tolerance']}"
        f" ({report['risk']['score']}/10)",
        f"USD/INR: {summary['exchange_rate']:.2f}",
        "",
        "Asset allocation",
    ]
    for slice_ in report["allocation"]:
        lines.append(f"  {slice_['name']:<28} {slice_['percentage']:>3}%  {slice_['amount']}")

    lines += ["", "Securities"]
    for sec in report["securities"]:
        lines.append(f"  {sec['symbol']:<15} {sec['allocation']:>3}%  {sec['price']}  [{sec['source']}]")

    lines += ["", "Strategy"]
    if strategy["type"] == StrategyType.SIP.value:
        lines.append(f"  SIP of {strategy['monthly_amount']} per month")
    else:
        lines.append("  Lump sum")
    lines.append(f"  {strategy['rationale']}")

    lines += ["", "Risk", f"  {report['risk']['description']}", "", "Next steps"]
    lines += [f"  {step}" for step in report["process_guide"]]

    return "\n".join(lines)
