"""Chat intents and their mapping onto admin tool requests.

An intent is what the assistant understood from the conversation: an
operation plus whatever slots it has filled so far. Slots are loose; the
tool request schema decides whether they are complete.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import Field, TypeAdapter
from models.tools import (
    PlanInterval,
    ProductVisibility,
    ToolModel,
    ToolRequest,
    parse_tool_request,
)


class ProductSlots(ToolModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_urls: Optional[List[str]] = None
    visibility: Optional[ProductVisibility] = None
    company_id: Optional[str] = None


class PlanSlots(ToolModel):
    product_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price_cents: Optional[int] = None
    interval: Optional[PlanInterval] = None
    trial_days: Optional[int] = None
    company_id: Optional[str] = None


class ListProductsIntent(ToolModel):
    kind: Literal["listProducts"]
    company_id: str


class CreateProductIntent(ToolModel):
    kind: Literal["createProduct"]
    slots: ProductSlots


class UpdateProductIntent(ToolModel):
    kind: Literal["updateProduct"]
    id: str
    slots: ProductSlots


class DeleteProductIntent(ToolModel):
    kind: Literal["deleteProduct"]
    id: str


class ListPlansIntent(ToolModel):
    kind: Literal["listPlans"]
    company_id: str
    product_id: Optional[str] = None


class CreatePlanIntent(ToolModel):
    kind: Literal["createPlan"]
    slots: PlanSlots


class UpdatePlanIntent(ToolModel):
    kind: Literal["updatePlan"]
    id: str
    slots: PlanSlots


class DeletePlanIntent(ToolModel):
    kind: Literal["deletePlan"]
    id: str


Intent = Annotated[
    Union[
        ListProductsIntent,
        CreateProductIntent,
        UpdateProductIntent,
        DeleteProductIntent,
        ListPlansIntent,
        CreatePlanIntent,
        UpdatePlanIntent,
        DeletePlanIntent,
    ],
    Field(discriminator="kind"),
]

intent_adapter: TypeAdapter = TypeAdapter(Intent)


def parse_intent(data: Any) -> Intent:
    return intent_adapter.validate_python(data)


def _filled(slots: ToolModel) -> Dict[str, Any]:
    # Slots the conversation actually produced, in wire (camelCase) form
    return slots.model_dump(by_alias=True, exclude_unset=True)


def intent_to_payload(intent: Any) -> Dict[str, Any]:
    """Raw tool request body for an intent."""
    payload: Dict[str, Any] = {"type": intent.kind}

    if isinstance(intent, (ListProductsIntent, ListPlansIntent)):
        payload["companyId"] = intent.company_id
        if isinstance(intent, ListPlansIntent) and intent.product_id:
            payload["productId"] = intent.product_id
        return payload

    if hasattr(intent, "id"):
        payload["id"] = intent.id
    if hasattr(intent, "slots"):
        payload["input"] = _filled(intent.slots)
    return payload


def intent_to_tool_request(intent: Any) -> ToolRequest:
    """Validated ToolRequest for an intent.

    Raises pydantic.ValidationError when required slots are still missing.
    """
    return parse_tool_request(intent_to_payload(intent))
