"""Pydantic models describing the public API surface."""

from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)

__all__ = [
    "CartItemInput",
    "CartTotalsRequest",
    "TotalsSummary",
    "LineEntry",
    "ResponseMeta",
    "CartTotalsResponse",
    "format_validation_error",
    "TAX_SOURCE_CONFLICT_ERROR",
]


TAX_SOURCE_CONFLICT_ERROR = "Provide either tax_rate or tax_profile, not both"


class CartItemInput(BaseModel):
    """A single line item submitted by the client."""

    model_config = ConfigDict(
        extra="forbid", populate_by_name=True, allow_inf_nan=False
    )

    price: float = Field(..., ge=0)
    quantity: int = Field(default=1, ge=0)
    is_tax_exempt: bool = Field(default=False, alias="isTaxExempt")


class CartTotalsRequest(BaseModel):
    """Cart contents plus optional discount and tax selection."""

    model_config = ConfigDict(
        extra="forbid", populate_by_name=True, allow_inf_nan=False
    )

    items: list[CartItemInput] = Field(default_factory=list)
    # Range checks for discount and tax are owned by the calculators.
    discount_percent: float | None = Field(default=None, alias="discountPercent")
    tax_rate: float | None = Field(default=None, alias="taxRate")
    tax_profile: str | None = Field(default=None, alias="taxProfile")

    @model_validator(mode="after")
    def _ensure_single_tax_source(self) -> CartTotalsRequest:
        if self.tax_rate is not None and self.tax_profile is not None:
            raise ValueError(TAX_SOURCE_CONFLICT_ERROR)
        return self


class TotalsSummary(BaseModel):
    """Rounded cart totals."""

    model_config = ConfigDict(extra="forbid")

    subtotal: float
    discount: float
    tax: float
    total: float


class LineEntry(BaseModel):
    """Per-item breakdown echoed back to the client."""

    model_config = ConfigDict(extra="forbid")

    index: int
    price: float
    quantity: int
    line_total: float
    is_tax_exempt: bool


class ResponseMeta(BaseModel):
    """Rates actually applied to the cart."""

    model_config = ConfigDict(extra="forbid")

    discount_percent: float
    discount_label: str
    tax_rate: float
    tax_label: str
    tax_profile: str | None = None
    item_count: int
    taxable_item_count: int


class CartTotalsResponse(BaseModel):
    """Full response payload produced by the totals service."""

    model_config = ConfigDict(extra="forbid")

    totals: TotalsSummary
    lines: list[LineEntry]
    meta: ResponseMeta


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        elif message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid cart payload: {details}"
