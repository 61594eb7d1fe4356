"""Tests for the FastAPI query endpoints."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pytest
from fastapi.testclient import TestClient

from app import create_app
from limits import I8


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def i8_client():
    return TestClient(create_app(limits=I8))


def _iv(lower: int, upper: int) -> dict:
    return {"lower": lower, "upper": upper}


# ---------------------------------------------------------------------------
# POST /intervals/{op}
# ---------------------------------------------------------------------------

class TestIntervalEndpoint:

    def test_add(self, client):
        resp = client.post("/intervals/add", json={"a": _iv(10, 20), "b": _iv(-1, 2)})
        assert resp.status_code == 200
        assert resp.json() == _iv(9, 22)

    def test_mul(self, client):
        resp = client.post("/intervals/mul", json={"a": _iv(-8, 0), "b": _iv(2, 10)})
        assert resp.json() == _iv(-80, 0)

    def test_union_and_closest(self, client):
        body = {"a": _iv(5, 9), "b": _iv(0, 3)}
        assert client.post("/intervals/union", json=body).json() == _iv(0, 9)
        assert client.post("/intervals/closest", json=body).json() == _iv(5, 5)

    def test_unary_ignores_b(self, client):
        resp = client.post("/intervals/negate", json={"a": _iv(-3, 5)})
        assert resp.json() == _iv(-5, 3)
        resp = client.post("/intervals/abs", json={"a": _iv(-3, 5)})
        assert resp.json() == _iv(0, 5)

    def test_binary_without_b_is_422(self, client):
        resp = client.post("/intervals/sub", json={"a": _iv(0, 1)})
        assert resp.status_code == 422

    def test_unknown_op_is_404(self, client):
        resp = client.post("/intervals/pow", json={"a": _iv(0, 1), "b": _iv(0, 1)})
        assert resp.status_code == 404
        assert "pow" in resp.json()["detail"]

    def test_inverted_interval_is_422(self, client):
        resp = client.post("/intervals/add", json={"a": _iv(5, 1), "b": _iv(0, 1)})
        assert resp.status_code == 422

    def test_overflow_is_422(self, i8_client):
        resp = i8_client.post("/intervals/add", json={"a": _iv(0, 100), "b": _iv(0, 100)})
        assert resp.status_code == 422
        assert "at most 127" in resp.json()["detail"]

    def test_operand_outside_limits_is_422(self, i8_client):
        resp = i8_client.post("/intervals/min", json={"a": _iv(0, 300), "b": _iv(0, 1)})
        assert resp.status_code == 422

    def test_rejection_logged(self, i8_client, caplog):
        with caplog.at_level(logging.INFO, logger="api"):
            i8_client.post("/intervals/neg", json={"a": _iv(-128, 0)})
        assert "unknown interval operation" in caplog.text


# ---------------------------------------------------------------------------
# POST /classify/{op}
# ---------------------------------------------------------------------------

class TestClassifyEndpoint:

    def test_floor_may_fail(self, client):
        resp = client.post("/classify/floor", json={"a": _iv(-3, 4), "b": _iv(0, 0)})
        assert resp.status_code == 200
        assert resp.json() == {"outcome": "may_fail", "interval": _iv(0, 4)}

    def test_ceil_must_fail(self, client):
        resp = client.post("/classify/ceil", json={"a": _iv(5, 9), "b": _iv(0, 4)})
        assert resp.json() == {"outcome": "must_fail", "interval": None}

    def test_clamp(self, client):
        resp = client.post(
            "/classify/clamp",
            json={"a": _iv(2, 5), "b": _iv(0, 0), "c": _iv(10, 10)},
        )
        assert resp.json() == {"outcome": "must_pass", "interval": _iv(2, 5)}

    def test_clamp_without_upper_is_422(self, client):
        resp = client.post("/classify/clamp", json={"a": _iv(2, 5), "b": _iv(0, 0)})
        assert resp.status_code == 422

    def test_divide_rounding(self, client):
        body = {"a": _iv(-7, -7), "b": _iv(2, 2)}
        floor = client.post("/classify/divide", json=body).json()
        trunc = client.post("/classify/divide", json={**body, "rounding": "trunc"}).json()
        assert floor == {"outcome": "must_pass", "interval": _iv(-4, -4)}
        assert trunc == {"outcome": "must_pass", "interval": _iv(-3, -3)}

    def test_divide_by_zero_must_fail(self, client):
        resp = client.post("/classify/divide", json={"a": _iv(0, 9), "b": _iv(0, 0)})
        assert resp.json()["outcome"] == "must_fail"

    def test_remainder(self, client):
        resp = client.post("/classify/remainder", json={"a": _iv(0, 100), "b": _iv(-2, 7)})
        assert resp.json() == {"outcome": "may_fail", "interval": _iv(-6, 6)}

    def test_bad_rounding_is_422(self, client):
        resp = client.post(
            "/classify/divide",
            json={"a": _iv(0, 9), "b": _iv(1, 2), "rounding": "ceiling"},
        )
        assert resp.status_code == 422

    def test_unknown_op_is_404(self, client):
        resp = client.post("/classify/sqrt", json={"a": _iv(0, 9), "b": _iv(1, 2)})
        assert resp.status_code == 404

    def test_quotient_overflow_is_422(self, i8_client):
        resp = i8_client.post(
            "/classify/divide",
            json={"a": _iv(-128, 0), "b": _iv(-1, -1), "rounding": "trunc"},
        )
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# POST /order, /furthest
# ---------------------------------------------------------------------------

class TestQueryEndpoints:

    def test_order_any(self, client):
        resp = client.post("/order", json={"a": _iv(0, 12), "b": _iv(-10, 4)})
        assert resp.json() == {"possible": ["less", "same", "more"]}

    def test_order_definite(self, client):
        resp = client.post("/order", json={"a": _iv(0, 2), "b": _iv(5, 9)})
        assert resp.json() == {"possible": ["less"]}

    def test_furthest(self, client):
        resp = client.post("/furthest", json={"a": _iv(0, 4), "b": _iv(2, 2)})
        assert resp.json() == {"possible": ["equidistant"]}
        resp = client.post("/furthest", json={"a": _iv(0, 4), "b": _iv(1, 3)})
        assert resp.json() == {"possible": ["upper", "lower", "equidistant"]}

    def test_furthest_point(self, client):
        resp = client.post("/furthest", json={"a": _iv(3, 3), "b": _iv(0, 9)})
        assert resp.json() == {"possible": ["equal"]}


# ---------------------------------------------------------------------------
# POST /verify
# ---------------------------------------------------------------------------

class TestVerifyEndpoint:

    def test_verify_passes(self, client):
        resp = client.post("/verify", json={"a": _iv(-4, 4), "b": _iv(-2, 3)})
        assert resp.status_code == 200
        data = resp.json()
        assert data["passed"] is True
        specs = [r["spec"] for r in data["reports"]]
        assert "addition" in specs
        assert "division (trunc)" in specs
        for report in data["reports"]:
            for result in report["results"]:
                assert result["tests_run"] == 9 * 6
                assert result["counterexample"] is None

    def test_verify_reports_skipped(self, i8_client):
        resp = i8_client.post("/verify", json={"a": _iv(0, 100), "b": _iv(0, 100)})
        data = resp.json()
        assert data["passed"] is True
        addition = next(r for r in data["reports"] if r["spec"] == "addition")
        assert addition["skipped"]
        assert addition["results"] == []
