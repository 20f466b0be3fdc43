"""Request and result models for the Whop admin tool endpoint.

Wire names are camelCase (``companyId``, ``priceCents``); attributes are
snake_case, which is also what the Whop REST API expects in request bodies.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

AT_LEAST_ONE_FIELD = "At least one field must be provided"

ProductVisibility = Literal["visible", "hidden", "archived", "quick_link"]
PlanInterval = Literal["monthly", "annual"]

NonEmptyStr = Annotated[str, Field(min_length=1)]
NonNegativeInt = Annotated[int, Field(strict=True, ge=0)]

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid url")
    # Keep the caller's spelling; AnyUrl would normalize it
    return value


ImageUrl = Annotated[str, AfterValidator(_check_url)]
ImageUrls = Annotated[List[ImageUrl], Field(max_length=10)]


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("Expected a value, received null")
    return value


# May be left out of a request, but not sent as null
Omittable = AfterValidator(_reject_null)


class ToolModel(BaseModel):
    """Base for every tool payload: camelCase on the wire, snake_case in code."""
    model_config = ConfigDict(alias_generator=to_camel)


class _RequireAnyField(ToolModel):
    @model_validator(mode="after")
    def require_any_field(self):
        if not self.model_fields_set:
            raise ValueError(AT_LEAST_ONE_FIELD)
        return self


# Products

class ProductCreateInput(ToolModel):
    company_id: NonEmptyStr
    name: NonEmptyStr
    description: Annotated[Optional[str], Omittable] = None
    image_urls: Annotated[Optional[ImageUrls], Omittable] = None
    visibility: Annotated[Optional[ProductVisibility], Omittable] = None


class ProductUpdateInput(_RequireAnyField):
    """Partial product; only fields present in the request are sent upstream."""
    company_id: Annotated[Optional[NonEmptyStr], Omittable] = None
    name: Annotated[Optional[NonEmptyStr], Omittable] = None
    description: Annotated[Optional[str], Omittable] = None
    image_urls: Annotated[Optional[ImageUrls], Omittable] = None
    visibility: Annotated[Optional[ProductVisibility], Omittable] = None


# Plans

class PlanCreateInput(ToolModel):
    company_id: NonEmptyStr
    product_id: NonEmptyStr
    name: Annotated[Optional[str], Omittable] = None
    description: Annotated[Optional[str], Omittable] = None
    price_cents: NonNegativeInt
    interval: PlanInterval
    trial_days: Optional[NonNegativeInt] = None


class PlanUpdateInput(_RequireAnyField):
    """Partial plan; only fields present in the request are sent upstream."""
    company_id: Annotated[Optional[str], Omittable] = None
    product_id: Annotated[Optional[str], Omittable] = None
    name: Annotated[Optional[str], Omittable] = None
    description: Annotated[Optional[str], Omittable] = None
    price_cents: Annotated[Optional[NonNegativeInt], Omittable] = None
    interval: Annotated[Optional[PlanInterval], Omittable] = None
    trial_days: Optional[NonNegativeInt] = None


# Tool requests, discriminated by "type"

class ListProductsRequest(ToolModel):
    type: Literal["listProducts"]
    company_id: NonEmptyStr


class CreateProductRequest(ToolModel):
    type: Literal["createProduct"]
    input: ProductCreateInput


class UpdateProductRequest(ToolModel):
    type: Literal["updateProduct"]
    id: NonEmptyStr
    input: ProductUpdateInput


class DeleteProductRequest(ToolModel):
    type: Literal["deleteProduct"]
    id: NonEmptyStr


class ListPlansRequest(ToolModel):
    type: Literal["listPlans"]
    company_id: NonEmptyStr
    product_id: Annotated[Optional[str], Omittable] = None


class CreatePlanRequest(ToolModel):
    type: Literal["createPlan"]
    input: PlanCreateInput


class UpdatePlanRequest(ToolModel):
    type: Literal["updatePlan"]
    id: NonEmptyStr
    input: PlanUpdateInput


class DeletePlanRequest(ToolModel):
    type: Literal["deletePlan"]
    id: NonEmptyStr


ToolRequest = Annotated[
    Union[
        ListProductsRequest,
        CreateProductRequest,
        UpdateProductRequest,
        DeleteProductRequest,
        ListPlansRequest,
        CreatePlanRequest,
        UpdatePlanRequest,
        DeletePlanRequest,
    ],
    Field(discriminator="type"),
]

TOOL_TYPES = (
    "listProducts",
    "createProduct",
    "updateProduct",
    "deleteProduct",
    "listPlans",
    "createPlan",
    "updatePlan",
    "deletePlan",
)

tool_request_adapter: TypeAdapter = TypeAdapter(ToolRequest)


def parse_tool_request(payload: Any) -> ToolRequest:
    """Validate a decoded JSON body. Raises pydantic.ValidationError."""
    return tool_request_adapter.validate_python(payload)


def validation_message(error: ValidationError) -> str:
    """Flatten a ValidationError into the message returned to callers."""
    return ", ".join(issue["msg"] for issue in error.errors())


# Results

class ToolResult(BaseModel):
    """Standard result of every tool operation."""
    ok: bool
    data: Optional[Any] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error}


def success(data: Any) -> ToolResult:
    return ToolResult(ok=True, data=data)


def failure(message: str) -> ToolResult:
    return ToolResult(ok=False, error=message)
