"""
Prompt template records and the built-in system templates.

System templates are defined here and never edited at runtime. User templates
share the same record type and are persisted by ``TemplateStore``.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional


DEFAULT_FORMAT = "paragraph"


@dataclass(frozen=True)
class PromptOption:
    """A labeled choice shown to the end user alongside a template."""

    label: str
    value: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PromptOption":
        return cls(
            label=data["label"],
            value=data["value"],
            description=data.get("description"),
        )


@dataclass(frozen=True)
class PromptTemplate:
    """A named instruction blueprint controlling the shape of a summary."""

    id: str
    name: str
    description: str
    template: str
    customizable: bool = True
    is_system_template: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[str] = None
    options: tuple[PromptOption, ...] = field(default_factory=tuple)
    default_options: tuple[PromptOption, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (timestamps as ISO-8601)."""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        data["options"] = [asdict(option) for option in self.options]
        data["default_options"] = [asdict(option) for option in self.default_options]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PromptTemplate":
        created_at = data.get("created_at")
        updated_at = data.get("updated_at")
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            template=data["template"],
            customizable=data.get("customizable", True),
            is_system_template=data.get("is_system_template", False),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
            category=data.get("category"),
            options=tuple(PromptOption.from_dict(o) for o in data.get("options") or []),
            default_options=tuple(
                PromptOption.from_dict(o) for o in data.get("default_options") or []
            ),
        )


@dataclass(frozen=True)
class CustomPromptTemplate:
    """A one-off template supplied with a request; wins over any named format."""

    template: str
    variables: dict[str, str] = field(default_factory=dict)


def _system(id: str, name: str, description: str, template: str, category: str) -> PromptTemplate:
    return PromptTemplate(
        id=id,
        name=name,
        description=description,
        template=template,
        customizable=True,
        is_system_template=True,
        category=category,
    )


SYSTEM_TEMPLATES: dict[str, PromptTemplate] = {
    "paragraph": _system(
        "paragraph",
        "Paragraph",
        "A concise prose summary in a few well-structured paragraphs.",
        "Summarize the document in clear, well-structured paragraphs. "
        "Cover the main purpose, the key points and any conclusions, "
        "without adding information that is not in the text.",
        "general",
    ),
    "bullet_points": _system(
        "bullet_points",
        "Bullet Points",
        "A scannable list of the document's key points.",
        "Summarize the document as a bulleted list of key points. "
        "Group related points under short headings and keep each bullet to one or two sentences.",
        "general",
    ),
    "financial": _system(
        "financial",
        "Financial Report",
        "A comprehensive summary format for financial reports and analysis.",
        """Analyze the uploaded financial reports provided by brokerage and investment research firms. Generate a concise, investor-focused summary that offers a high-level assessment of the investment opportunity, so an investor can quickly decide whether to read the full report. Include the following sections:
1. Key Takeaways & Market Outlook
* Main Insights: the core messages of the report.
* Market Sentiment: whether the overall tone is bullish, bearish or neutral.
* Macroeconomic Impact: significant economic or industry-wide factors affecting the outlook.
2. Investment Opportunity & Stock Rating
* Analyst Ratings: the rating given (e.g. Buy, Hold, Sell, Overweight, Underweight).
* Price Targets: the price target compared to the current market price.
* Bullish/Bearish Arguments: the key reasons supporting the rating.
3. Financial & Valuation Highlights
* Financial Metrics: revenue growth, earnings forecasts, profit margins, debt levels, cash flow trends.
* Valuation Measures: P/E, EV/EBITDA, DCF assessments and peer comparisons.
* Recent Updates: revisions in estimates, dividend changes or earnings surprises.
4. Risk Factors & Challenges
* Primary Risks: regulatory, competitive or economic risks mentioned in the report.
* Threat Analysis: external factors that could adversely impact the company or sector.
5. Analyst Insights & Future Catalysts
* Key Catalysts: upcoming events such as earnings releases, product launches or regulatory decisions.
* Industry Trends: broader trends that might affect future performance.
6. Actionable Investment Summary
* Opportunity Assessment: a clear judgment on whether the investment appears attractive.
* Entry/Exit Strategies: potential entry or exit points and risk management, if applicable.
* Next Steps: a brief pointer to the full report for deeper understanding.
Keep the summary clear, data-driven and unbiased, emphasising the factors that matter for an investment decision.""",
        "finance",
    ),
    "academic": _system(
        "academic",
        "Academic Paper",
        "A summary format suitable for academic papers and research articles.",
        """Analyze the academic content and provide a summary with these sections:
1. Research Overview
* Research Question/Hypothesis
* Methodology
* Key Findings
2. Literature Review
* Theoretical Framework
* Previous Research
* Knowledge Gaps
3. Methodology Analysis
* Research Design
* Data Collection
* Analysis Methods
4. Results & Discussion
* Key Findings
* Statistical Significance
* Implications
5. Conclusions
* Research Contribution
* Limitations
* Future Research Directions""",
        "research",
    ),
    "technical": _system(
        "technical",
        "Technical Documentation",
        "A summary format for technical documents and specifications.",
        """Analyze the technical content and provide a summary with these sections:
1. Technical Overview
* System Architecture
* Key Components
* Technologies Used
2. Implementation Details
* Core Features
* Technical Requirements
* Dependencies
3. Performance & Security
* Performance Metrics
* Security Measures
* Scalability Considerations
4. Integration & Deployment
* Integration Points
* Deployment Process
* Configuration Requirements
5. Maintenance & Support
* Monitoring
* Troubleshooting
* Updates & Patches""",
        "engineering",
    ),
}
