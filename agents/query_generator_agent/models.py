"""
Pydantic models and state for query generator.
"""

from typing import Dict, List, Optional, TypedDict
from pydantic import BaseModel, Field

from models.schemas import IndustryTerminology, ProductType, TaggedQuery


class QueryProfile(BaseModel):
    """Brand profile the queries are generated from."""
    brand_name: str = Field(description="Brand being scanned")
    category: str = Field("", description="Primary category, already resolved")
    description: str = Field("", description="User description merged with enrichment")
    competitors: List[str] = Field(default_factory=list)
    user_categories: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    use_cases: List[str] = Field(default_factory=list)
    target_audience: Optional[str] = None
    detected_country: Optional[str] = None
    detected_country_code: Optional[str] = None
    is_location_bound: bool = False
    industry_type: Optional[str] = None
    product_type: Optional[ProductType] = None
    terminology: Optional[IndustryTerminology] = None


class QueryGeneratorState(TypedDict):
    """State for the query generator graph."""
    # Input
    profile: QueryProfile
    budget: int
    custom_queries: List[str]

    # Processing
    product_type: str
    industry: str
    category: str
    fields: Dict[str, str]  # Template fields shared by every tier
    context: Dict[str, object]  # use_case, audience, problem, features, search_categories
    tiers: Dict[str, List[TaggedQuery]]

    # Output
    queries: List[TaggedQuery]

    # Metadata
    errors: List[str]
    completed: bool
