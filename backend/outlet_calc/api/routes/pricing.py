"""Pricing Routes — stateless quote and free-text number formatting.

Invariants:
    - No workspace or store involved: same input always gives the same response
    - Discounts out of range are clamped by core, never rejected
"""

from fastapi import APIRouter

from outlet_calc.core.pricing import compute_pricing
from outlet_calc.schemas.pricing import (
    PricingInputBody, PricingResultOut, QuoteResponse,
    FormatInputRequest, FormatInputResponse,
)

router = APIRouter(prefix="/api/v1/pricing", tags=["pricing"])


@router.post("/quote", response_model=QuoteResponse)
async def quote(body: PricingInputBody):
    """Compute the full pricing pipeline for one input."""
    result = compute_pricing(body.to_domain())
    return QuoteResponse(input=body, result=PricingResultOut.from_domain(result))


@router.post("/format-input", response_model=FormatInputResponse)
async def format_input(body: FormatInputRequest):
    """Re-group a price field as typed; value is null when no digits were entered."""
    return FormatInputResponse.from_text(body.text)
