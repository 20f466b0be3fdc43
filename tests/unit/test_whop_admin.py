"""
Tests for the WhopAdmin proxy operations.

Covers:
  - write guard: every mutation refused with zero outbound calls
  - payload shapes for create/update/delete
  - sparse updates send every present field, falsy values included
  - list normalization and the listPlans product filter
  - transport and credential failures become ToolResult errors
"""

import pytest
from unittest.mock import MagicMock

import requests

from models.tools import (
    PlanCreateInput,
    PlanUpdateInput,
    ProductCreateInput,
    ProductUpdateInput,
)
from services import whop_client
from services.whop_admin import WRITES_DISABLED_ERROR, WhopAdmin
from services.whop_client import WhopAPIError, WhopConfigError


@pytest.fixture
def rest():
    return MagicMock()


@pytest.fixture
def read():
    return MagicMock()


@pytest.fixture
def admin(rest, read):
    return WhopAdmin(
        allow_writes=True,
        rest_client_factory=lambda: rest,
        read_client_factory=lambda: read,
    )


def _product_input(**kwargs):
    return ProductCreateInput(**{"companyId": "biz_1", "name": "X", **kwargs})


def _plan_input(**kwargs):
    data = {"companyId": "biz_1", "productId": "prod_1", "priceCents": 9900, "interval": "monthly"}
    data.update(kwargs)
    return PlanCreateInput(**data)


WRITE_CALLS = [
    ("create_product", lambda: (_product_input(),)),
    ("update_product", lambda: ("prod_1", ProductUpdateInput(name="Y"))),
    ("delete_product", lambda: ("prod_1",)),
    ("create_plan", lambda: (_plan_input(),)),
    ("update_plan", lambda: ("plan_1", PlanUpdateInput(priceCents=100))),
    ("delete_plan", lambda: ("plan_1",)),
]


@pytest.mark.parametrize("method,args", WRITE_CALLS)
def test_writes_disabled_blocks_every_mutation(method, args):
    rest_factory = MagicMock()
    admin = WhopAdmin(allow_writes=False, rest_client_factory=rest_factory, read_client_factory=MagicMock())

    result = getattr(admin, method)(*args())

    assert result.ok is False
    assert result.error == WRITES_DISABLED_ERROR
    rest_factory.assert_not_called()


def test_writes_reuse_the_process_rest_client(monkeypatch):
    rest = MagicMock()
    monkeypatch.setattr(whop_client, "_rest_client", rest)
    admin = WhopAdmin(allow_writes=True, read_client_factory=MagicMock())

    admin.delete_product("prod_1")
    admin.delete_plan("plan_1")

    assert rest.request.call_count == 2


def test_lists_ignore_write_guard(read):
    read.list_access_passes.return_value = {"data": [{"id": "prod_1"}]}
    read.list_plans.return_value = []
    admin = WhopAdmin(allow_writes=False, rest_client_factory=MagicMock(), read_client_factory=lambda: read)

    assert admin.list_products("biz_1").ok is True
    assert admin.list_plans("biz_1").ok is True


# Products

def test_create_product_posts_snake_case_payload(admin, rest):
    rest.request.return_value = {"id": "prod_1"}

    result = admin.create_product(_product_input(
        description="Desc",
        imageUrls=["https://cdn.example.com/a.png"],
        visibility="hidden",
    ))

    assert result.ok is True
    assert result.data == {"id": "prod_1"}
    rest.request.assert_called_once_with(
        "POST",
        "/products",
        body={
            "company_id": "biz_1",
            "name": "X",
            "description": "Desc",
            "image_urls": ["https://cdn.example.com/a.png"],
            "visibility": "hidden",
        },
    )


def test_create_product_omits_absent_fields(admin, rest):
    rest.request.return_value = {"id": "prod_1"}

    admin.create_product(_product_input())

    rest.request.assert_called_once_with("POST", "/products", body={"company_id": "biz_1", "name": "X"})


def test_update_product_sends_only_present_fields(admin, rest):
    rest.request.return_value = {"id": "prod_1", "description": ""}

    result = admin.update_product("prod_1", ProductUpdateInput(description=""))

    assert result.ok is True
    rest.request.assert_called_once_with("PATCH", "/products/prod_1", body={"description": ""})


def test_delete_product_returns_id(admin, rest):
    rest.request.return_value = None

    result = admin.delete_product("prod_1")

    assert result.ok is True
    assert result.data == {"id": "prod_1"}
    rest.request.assert_called_once_with("DELETE", "/products/prod_1", body=None)


def test_list_products_normalizes_connection(admin, read):
    read.list_access_passes.return_value = {"edges": [{"node": {"id": "a"}}, {"node": None}]}

    result = admin.list_products("biz_1")

    assert result.ok is True
    assert result.data == [{"id": "a"}]
    read.list_access_passes.assert_called_once_with("biz_1")


# Plans

def test_create_plan_omits_null_trial_days(admin, rest):
    rest.request.return_value = {"id": "plan_1"}

    admin.create_plan(_plan_input(trialDays=None, name="VIP"))

    rest.request.assert_called_once_with(
        "POST",
        "/plans",
        body={
            "company_id": "biz_1",
            "product_id": "prod_1",
            "name": "VIP",
            "price_cents": 9900,
            "interval": "monthly",
        },
    )


def test_create_plan_sends_trial_days(admin, rest):
    rest.request.return_value = {"id": "plan_1"}

    admin.create_plan(_plan_input(trialDays=7))

    body = rest.request.call_args.kwargs["body"]
    assert body["trial_days"] == 7


def test_update_plan_sends_falsy_values_that_were_given(admin, rest):
    """Presence, not truthiness, decides which fields go into the PATCH."""
    rest.request.return_value = {"id": "plan_1"}

    admin.update_plan("plan_1", PlanUpdateInput(name="", priceCents=0, productId="", trialDays=None))

    rest.request.assert_called_once_with(
        "PATCH",
        "/plans/plan_1",
        body={"name": "", "price_cents": 0, "product_id": "", "trial_days": None},
    )


def test_update_plan_leaves_out_absent_fields(admin, rest):
    rest.request.return_value = {"id": "plan_1"}

    admin.update_plan("plan_1", PlanUpdateInput(interval="annual"))

    rest.request.assert_called_once_with("PATCH", "/plans/plan_1", body={"interval": "annual"})


def test_delete_plan_returns_id(admin, rest):
    result = admin.delete_plan("plan_1")

    assert result.data == {"id": "plan_1"}
    rest.request.assert_called_once_with("DELETE", "/plans/plan_1", body=None)


def test_list_plans_filters_by_product(admin, read):
    read.list_plans.return_value = {
        "data": [
            {"id": "plan_1", "product": {"id": "prod_1"}},
            {"id": "plan_2", "product": {"id": "prod_2"}},
            {"id": "plan_3"},
            {"id": "plan_4", "product": None},
            {"id": "plan_5", "product": "prod_1"},
        ]
    }

    result = admin.list_plans("biz_1", "prod_1")

    assert result.ok is True
    assert [plan["id"] for plan in result.data] == ["plan_1"]
    read.list_plans.assert_called_once_with("biz_1")


def test_list_plans_without_product_returns_all(admin, read):
    read.list_plans.return_value = [{"id": "plan_1"}, None, {"id": "plan_3"}]

    result = admin.list_plans("biz_1")

    assert [plan["id"] for plan in result.data] == ["plan_1", "plan_3"]


# Failures

def test_upstream_error_becomes_failure(admin, rest):
    rest.request.side_effect = WhopAPIError("Product not found", 404)

    result = admin.update_product("prod_404", ProductUpdateInput(name="Y"))

    assert result.ok is False
    assert result.error == "Product not found"


def test_network_error_becomes_failure(admin, rest):
    rest.request.side_effect = requests.ConnectionError("connection refused")

    result = admin.delete_plan("plan_1")

    assert result.ok is False
    assert "connection refused" in result.error


def test_missing_credentials_become_failure(read):
    def missing_key():
        raise WhopConfigError("WHOP_API_KEY is not set")

    admin = WhopAdmin(allow_writes=True, rest_client_factory=missing_key, read_client_factory=missing_key)

    assert admin.create_product(_product_input()).error == "WHOP_API_KEY is not set"
    assert admin.list_plans("biz_1").error == "WHOP_API_KEY is not set"


def test_error_without_message_reports_unknown_error(admin, read):
    read.list_access_passes.side_effect = RuntimeError()

    result = admin.list_products("biz_1")

    assert result.error == "Unknown error"
