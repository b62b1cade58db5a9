"""
Resampling Advisor — API Test Suite
=====================================
Exercises the /api/v1/resampling endpoints through FastAPI's TestClient.

Run: pytest app/core/resampling/tests -v
"""

import pytest
from fastapi.testclient import TestClient

from main import app

BASE = "/api/v1/resampling"


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


class TestAdvisorEndpoints:

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["service"] == "Resample Lab"

    def test_health(self, client):
        r = client.get(f"{BASE}/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "healthy"
        assert "weight_engine" in data["components"]
        assert len(data["charts"]) == 4

    def test_recommend_defaults(self, client):
        r = client.post(f"{BASE}/recommend", json={})
        assert r.status_code == 200
        data = r.json()
        assert data["strategy"] == "Hybrid"
        assert data["color"] == "#a855f7"
        assert data["fold_analysis"]["status"] == "STABLE"

    def test_recommend_low_dim_scarce(self, client):
        r = client.post(f"{BASE}/recommend", json={
            "features": 5, "minority": 50, "total": 2000, "folds": 5,
            "sparsity": 0.0, "sparsity_homogeneity": 0.5,
        })
        data = r.json()
        assert data["strategy"] == "Oversample"
        assert data["sparsity_warning"] is None

    def test_recommend_rejects_out_of_range_sparsity(self, client):
        r = client.post(f"{BASE}/recommend", json={"sparsity": 1.5})
        assert r.status_code == 422

    def test_weights(self, client):
        r = client.post(f"{BASE}/weights", json={"features": 5, "minority": 50})
        data = r.json()
        assert data["dominant_original"] == "Oversample"
        assert data["oversample"] > data["baseline"]

    def test_blend_color(self, client):
        r = client.post(f"{BASE}/blend-color", json={"features": 10_000, "minority": 5000, "total": 20_000})
        data = r.json()
        assert set(data) == {"r", "g", "b", "hex"}
        assert data["hex"].startswith("#")

    def test_fold_color(self, client):
        r = client.get(f"{BASE}/fold-color", params={"minority": 300, "folds": 10})
        assert r.json() == {"r": 16, "g": 185, "b": 129, "hex": "#10b981"}

    def test_fold_analysis_impossible(self, client):
        r = client.get(f"{BASE}/fold-analysis", params={"minority": 10, "folds": 20, "total": 2000})
        data = r.json()
        assert data["status"] == "IMPOSSIBLE"
        assert data["viability_score"] == 0

    def test_params_update(self, client):
        r = client.post(f"{BASE}/params/update", json={
            "current": {"minority": 150, "total": 2000},
            "changes": {"total": 100},
        })
        assert r.json()["total"] == 150

    def test_phase_chart(self, client):
        r = client.post(f"{BASE}/phase-charts/folds_vs_minority", json={"include_grid": True})
        assert r.status_code == 200
        data = r.json()
        assert data["width"] == 150 and data["height"] == 100
        assert len(data["grid"]) == 100
        assert len(data["grid"][0]) == 150
        assert data["boundary"]["kind"] == "diagonal"

    def test_phase_chart_without_grid(self, client):
        r = client.post(f"{BASE}/phase-charts/features_vs_total", json={"include_grid": False})
        data = r.json()
        assert "grid" not in data
        assert data["boundary"]["kind"] == "vertical"

    def test_unknown_phase_chart(self, client):
        r = client.post(f"{BASE}/phase-charts/nope", json={})
        assert r.status_code == 404
        assert r.json()["detail"]["error"] == "unknown_chart"

    def test_palette(self, client):
        r = client.get(f"{BASE}/palette")
        assert r.json() == {
            "Oversample": "#ef4444",
            "Undersample": "#3b82f6",
            "Hybrid": "#a855f7",
            "No Resampling / Class Weights": "#10b981",
        }


class TestAdvisorErrors:

    @pytest.mark.parametrize("method,path,target,kwargs", [
        ("post", "/weights", "compute_weights", {"json": {}}),
        ("post", "/blend-color", "blend_color", {"json": {}}),
        ("get", "/fold-color", "fold_color", {"params": {"minority": 10, "folds": 5}}),
        ("get", "/fold-analysis", "analyze_folds",
         {"params": {"minority": 10, "folds": 5, "total": 100}}),
        ("post", "/params/update", "apply_update", {"json": {"changes": {"total": 10}}}),
        ("post", "/recommend", "evaluate", {"json": {}}),
    ])
    def test_engine_failure_returns_500(self, client, monkeypatch, caplog, method, path, target, kwargs):
        from app.api.v1 import advisor

        def broken(*args, **kw):
            raise RuntimeError("engine down")

        monkeypatch.setattr(advisor, target, broken)
        r = getattr(client, method)(f"{BASE}{path}", **kwargs)
        assert r.status_code == 500
        assert r.json()["detail"] == {"error": "engine down"}
        assert any(rec.levelname == "ERROR" and rec.exc_info for rec in caplog.records)
