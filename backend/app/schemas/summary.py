from pydantic import BaseModel, ConfigDict, Field


class SummaryMetrics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_responses: int = Field(0, alias="totalResponses")
    average_rating: float = Field(0.0, alias="averageRating")
    negative_count: int = Field(0, alias="negativeCount")
    positive_count: int = Field(0, alias="positiveCount")


class SummaryReport(BaseModel):
    """AI-generated report over a project's responses. Serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    recommendations: list[str] = Field(default_factory=list)
    negative_issues: list[str] = Field(default_factory=list, alias="negativeIssues")
    positive_highlights: list[str] = Field(default_factory=list, alias="positiveHighlights")
    metrics: SummaryMetrics = Field(default_factory=SummaryMetrics)
