"""Tests for normalize_connection across the Whop collection shapes."""

import pytest

from services.whop_admin import normalize_connection

A = {"id": "a"}
B = {"id": "b"}


@pytest.mark.parametrize(
    "connection",
    [
        [A, B],
        [A, None, B],
        {"data": [A, None, B]},
        {"nodes": [A, B]},
        {"edges": [{"node": A}, {"node": None}, {"node": B}]},
        {"edges": [{"node": A}, None, {}, {"node": B}]},
    ],
)
def test_known_shapes_flatten_in_order(connection):
    assert normalize_connection(connection) == [A, B]


@pytest.mark.parametrize("connection", [None, [], {}, "plans", 42])
def test_empty_or_unknown_input_gives_empty_list(connection):
    assert normalize_connection(connection) == []


def test_empty_data_falls_through_to_nodes():
    assert normalize_connection({"data": [], "nodes": [A]}) == [A]


def test_data_wins_over_nodes_and_edges():
    assert normalize_connection({"data": [A], "nodes": [B], "edges": [{"node": B}]}) == [A]


def test_all_null_data_and_no_other_shape():
    assert normalize_connection({"data": [None, None]}) == []


def test_edges_not_a_list():
    assert normalize_connection({"edges": {"node": A}}) == []
