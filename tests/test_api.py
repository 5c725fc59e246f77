"""
API Tests
=========
HTTP surface via FastAPI's TestClient. DOCCHECK_PROJECT_PATH points at a
throwaway project; the config store uses a temporary directory.
"""
import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def project_root(make_project, monkeypatch) -> str:
    root = make_project({
        "package.json": {"name": "shop", "dependencies": {"react": "^18"}, "scripts": {"dev": "vite"}},
        "README.md": "# Shop\n\n## Tech Stack\n- React 18\n",
        "src/": None,
    })
    monkeypatch.setenv("DOCCHECK_PROJECT_PATH", root)
    return root


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# Project endpoints
# ---------------------------------------------------------------------------
class TestProjectEndpoints:

    def test_project_without_doc(self, client, project_root):
        resp = client.get("/api/project")
        assert resp.status_code == 200
        data = resp.json()
        assert data["claudeMd"] is None
        assert data["validationResults"] == []
        assert data["projectInfo"]["name"] == "shop"
        assert data["projectInfo"]["packageManager"]["type"] == "npm"
        assert data["projectInfo"]["readmeClaims"]["techStack"] == ["React"]

    def test_save_then_check(self, client, project_root):
        resp = client.post("/api/save", json={"content": "We follow TDD."})
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        from doccheck.core.config import DOC_FILENAME
        with open(os.path.join(project_root, DOC_FILENAME), encoding="utf-8") as f:
            assert f.read() == "We follow TDD."

        results = client.get("/api/check").json()["results"]
        rules = [r["rule"] for r in results]
        assert "tdd-claimed-but-absent" in rules
        assert "tech-stack-undocumented" in rules
        assert "source-dir-undocumented" in rules

    def test_project_includes_doc_and_findings(self, client, project_root):
        client.post("/api/save", json={"content": "npm project, code in src/."})
        data = client.get("/api/project").json()
        assert data["claudeMd"] == "npm project, code in src/."
        assert all(r["severity"] != "error" for r in data["validationResults"])

    def test_undecodable_doc_still_served(self, client, project_root):
        from doccheck.core.config import DOC_FILENAME
        with open(os.path.join(project_root, DOC_FILENAME), "wb") as f:
            f.write(b"npm project in src \xff")
        resp = client.get("/api/project")
        assert resp.status_code == 200
        assert resp.json()["claudeMd"].startswith("npm project in src ")
        assert client.get("/api/check").status_code == 200

    def test_save_rejects_missing_content(self, client, project_root):
        resp = client.post("/api/save", json={"text": "wrong key"})
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid request body")

    def test_save_rejects_non_json(self, client, project_root):
        resp = client.post("/api/save", content=b"not json",
                           headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_missing_project_path_is_404(self, client, tmp_path, monkeypatch):
        monkeypatch.setenv("DOCCHECK_PROJECT_PATH", str(tmp_path / "gone"))
        resp = client.get("/api/project")
        assert resp.status_code == 404
        assert "Project path does not exist" in resp.json()["error"]

    def test_save_to_missing_project_is_404(self, client, tmp_path, monkeypatch):
        monkeypatch.setenv("DOCCHECK_PROJECT_PATH", str(tmp_path / "gone"))
        resp = client.post("/api/save", json={"content": "x"})
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Config endpoints
# ---------------------------------------------------------------------------
class TestConfigEndpoints:

    def test_defaults_when_nothing_saved(self, client):
        data = client.get("/api/config").json()
        assert [p["name"] for p in data["profiles"]] == ["default"]
        assert data["globalDefaults"]["practices"] == ""

    def test_post_then_get(self, client):
        payload = {
            "activeProfile": "web",
            "globalDefaults": {"quality": "Tests pass."},
            "profiles": [{"name": "web", "defaults": {"domain": "Retail."}}],
        }
        resp = client.post("/api/config", json=payload)
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        data = client.get("/api/config").json()
        assert data["activeProfile"] == "web"
        assert data["globalDefaults"]["quality"] == "Tests pass."

        defaults = client.get("/api/defaults").json()
        assert defaults["profile"] == "web"
        assert defaults["answers"]["domain"] == "Retail."
        assert defaults["answers"]["quality"] == "Tests pass."

    def test_post_invalid_json(self, client):
        resp = client.post("/api/config", content=b"{broken",
                           headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid JSON in request body"}

    def test_post_wrong_shape(self, client):
        resp = client.post("/api/config", json=["not", "an", "object"])
        assert resp.status_code == 400
        assert resp.json() == {"error": "Config must be a JSON object"}

    def test_defaults_for_unknown_profile(self, client):
        data = client.get("/api/defaults", params={"profile": "nope"}).json()
        assert data["profile"] is None
        assert data["answers"]["practices"] == ""


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------
class TestErrors:

    def test_unknown_route(self, client):
        resp = client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not found"}

    def test_unexpected_failure_is_generic_500(self, project_root):
        client = TestClient(app, raise_server_exceptions=False)
        with patch("doccheck.api.project.scan", side_effect=RuntimeError("boom")):
            resp = client.get("/api/check")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
