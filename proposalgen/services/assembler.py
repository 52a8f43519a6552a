"""Document assembler - proposal data to a markdown proposal."""

import logging
import re
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Union

from jinja2 import Environment

from proposalgen.models import (
    BusinessSettings,
    ProposalDocument,
    ProposalInput,
    TimelinePhase,
)

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_NAME = "Your Design Studio"
DEFAULT_BUSINESS_EMAIL = "hello@example.com"

TIMELINE_DISCLAIMER = (
    "*Please note: We operate in a creative capacity, and project timelines are "
    "dependent on the client's cooperation, timely responses, and clear direction "
    "on project requirements. Delays in providing feedback, content, or assets may "
    "extend the timeline accordingly.*"
)

TERMS_AND_CONDITIONS = [
    "All content and assets must be provided by client before design phase begins",
    "Revisions are included within each phase; additional rounds may incur extra fees",
    "Timeline begins upon receipt of deposit and required materials",
    "Final files delivered upon receipt of final payment",
]

PROPOSAL_TEMPLATE = """# Web Design Proposal

**Client:** {{ client_name }}
**Date:** {{ date }}
**From:** {{ business_name }}

---

## Project Summary

{{ project_summary }}

---

## Deliverables

{% for item in deliverables %}
### {{ item.name }}
{{ item.description }}

{% endfor %}
---

## Project Timeline

| Phase | Duration | Description |
|-------|----------|-------------|
{% for row in timeline %}
| {{ row.phase|cell }} | {{ row.duration|cell }} | {{ row.description|cell }} |
{% endfor %}
| **Total** | **{{ total_weeks }} weeks** | |

{{ disclaimer }}

---

## What We Need From You

{% for need in client_needs %}
- [ ] {{ need }}
{% endfor %}
{% if has_technical %}

---

## Technical Requirements

{% if tech.cms %}
**CMS:** {{ tech.cms }}

{% endif %}
{% if tech.integrations %}
**Integrations:**
{% for name in tech.integrations %}
- {{ name }}
{% endfor %}

{% endif %}
{% if tech.features %}
**Key Features:**
{% for name in tech.features %}
- {{ name }}
{% endfor %}
{% endif %}
{% endif %}

---

## Investment

| Milestone | Percentage | Amount |
|-----------|------------|--------|
{% for row in milestones %}
| {{ row.milestone|cell }} | {{ row.percentage }}% | {{ row.amount }} |
{% endfor %}

**Total Investment: {{ total_investment }}**

---

## Terms & Conditions

{% for term in terms %}
- {{ term }}
{% endfor %}

---

**{{ business_name }}**
{{ contact }}
"""


def _table_cell(value) -> str:
    """Keep table rows intact when a value contains a pipe or newline."""
    return str(value if value is not None else "").replace("|", "\\|").replace("\n", " ")


_environment = Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
_environment.filters["cell"] = _table_cell
_template = _environment.from_string(PROPOSAL_TEMPLATE)

_WEEKS_RE = re.compile(r"(\d+)")


def calculate_total_weeks(timeline: List[TimelinePhase]) -> int:
    """Sum the first integer found in each phase's duration label."""
    total = 0
    for phase in timeline:
        match = _WEEKS_RE.search(phase.duration or "")
        if match:
            total += int(match.group(1))
    return total


def to_decimal(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Coerce a price to Decimal without float artefacts."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_dollars(value: Decimal) -> Decimal:
    """Round half up to a whole currency unit."""
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def milestone_amount(
    percentage: Union[Decimal, float],
    total_price: Decimal
) -> Decimal:
    """Dollar amount of a milestone, rounded to whole dollars."""
    return round_dollars(Decimal(str(percentage)) / Decimal("100") * total_price)


def format_currency(amount: Decimal) -> str:
    """Format as USD with thousands separators and no cents, e.g. $8,500."""
    rounded = round_dollars(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_percentage(percentage: Union[Decimal, float]) -> str:
    """Render 30.0 as '30' and 33.333 as '33.33'."""
    if float(percentage).is_integer():
        return str(int(percentage))
    return f"{percentage:.2f}".rstrip("0").rstrip(".")


def format_long_date(value: datetime) -> str:
    """Long US date, e.g. 'October 16, 2026'."""
    return f"{value:%B} {value.day}, {value.year}"


def assemble(
    proposal: ProposalInput,
    settings: Optional[BusinessSettings] = None,
    total_price: Union[Decimal, int, float, str] = 0,
    current_date: Optional[datetime] = None
) -> ProposalDocument:
    """
    Assemble a proposal document from extracted data.

    Args:
        proposal: Structured data from the extraction step
        settings: Studio name and contact details; blanks get defaults
        total_price: Project total in USD
        current_date: Generation time, defaults to the current time

    Returns:
        ProposalDocument holding the markdown text
    """
    settings = settings or BusinessSettings()
    current_date = current_date or datetime.now()
    total = to_decimal(total_price)

    business_name = settings.name or DEFAULT_BUSINESS_NAME
    business_email = settings.email or DEFAULT_BUSINESS_EMAIL
    contact = business_email
    if settings.phone:
        contact += f"  \n{settings.phone}"

    tech = proposal.technical_requirements
    milestones = [
        {
            "milestone": m.milestone,
            "percentage": format_percentage(m.percentage),
            "amount": format_currency(milestone_amount(m.percentage, total)),
        }
        for m in proposal.payment_milestones
    ]

    markdown = _template.render(
        client_name=proposal.client_name,
        date=format_long_date(current_date),
        business_name=business_name,
        project_summary=proposal.project_summary,
        deliverables=proposal.deliverables,
        timeline=proposal.timeline,
        total_weeks=calculate_total_weeks(proposal.timeline),
        disclaimer=TIMELINE_DISCLAIMER,
        client_needs=proposal.client_needs,
        has_technical=bool(tech.cms or tech.integrations or tech.features),
        tech=tech,
        milestones=milestones,
        total_investment=format_currency(total),
        terms=TERMS_AND_CONDITIONS,
        contact=contact,
    )

    logger.debug(f"Assembled proposal for {proposal.client_name}: {len(markdown)} chars")

    return ProposalDocument(
        client_name=proposal.client_name,
        markdown=markdown,
        created_at=current_date
    )
