"""Pydantic models for lead submissions handed to the engine."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..core.scorer import BehaviorSummary


class BehavioralData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    time_on_page: float = Field(0, ge=0, alias="timeOnPage", description="Seconds on the inquiry page")
    scroll_depth: float = Field(0, ge=0, le=100, alias="scrollDepth", description="Percent scrolled")
    pages_visited: int = Field(0, ge=0, alias="pagesVisited")
    category_interest: List[str] = Field(default_factory=list, alias="categoryInterest")
    lead_score: Optional[int] = Field(None, alias="leadScore", description="Score computed by the capture form")

    def to_summary(self) -> BehaviorSummary:
        return BehaviorSummary(
            time_on_page=self.time_on_page,
            scroll_depth=self.scroll_depth,
            pages_visited=self.pages_visited,
            category_interest=list(self.category_interest),
            declared_score=self.lead_score,
        )


class LeadSubmission(BaseModel):
    """An inbound inquiry. Every field is optional; unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    industry_sector: Optional[str] = None
    product_category: Optional[str] = None
    budget_range: Optional[str] = None
    urgency: Optional[str] = None
    company_size: Optional[str] = None
    decision_authority: Optional[str] = None
    project_timeline: Optional[str] = None
    quantity_estimate: Optional[str] = None
    preferred_language: Optional[str] = None
    timezone: Optional[str] = None
    message: Optional[str] = None

    # Session data captured with the form
    device_type: Optional[str] = None
    referrer: Optional[str] = None
    page_views_count: Optional[int] = Field(None, ge=0)
    documents_downloaded: Optional[int] = Field(None, ge=0)
    total_engagement_time: Optional[float] = Field(None, ge=0)

    behavioral_data: Optional[BehavioralData] = Field(None, alias="behavioralData")

    def to_lead_dict(self) -> Dict[str, Any]:
        """Plain lead record as consumed by the scorer and router."""
        return self.model_dump(exclude_none=True, exclude={"behavioral_data"})

    def behavior_summary(self) -> BehaviorSummary:
        if self.behavioral_data is None:
            return BehaviorSummary()
        return self.behavioral_data.to_summary()
