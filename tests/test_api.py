import httpx
import pytest
from fastapi.testclient import TestClient

from rural_search.api import search as search_api
from rural_search.main import create_app
from rural_search.search.schema import PROVINCES
from rural_search.services import llm

from conftest import FakeModel, json_response, make_settings


@pytest.fixture
def client():
    return TestClient(create_app(make_settings()))


@pytest.mark.parametrize("qs", ["", "?q=", "?guests=2", "?q=&priceMin=10&priceMax=20&location=Granada"])
def test_missing_query_is_400(client, qs):
    r = client.get("/search" + qs)
    assert r.status_code == 400
    assert "error" in r.json()


def test_search_without_credentials(client):
    r = client.get("/search", params={"q": "casa con piscina"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["query"] == "casa con piscina"
    assert "sierra" in body["enhancedQuery"]
    assert [x["location"] for x in body["results"]] == PROVINCES


def test_legacy_path_is_served(client):
    r = client.get("/api/search", params={"q": "cortijo"})
    assert r.status_code == 200
    assert len(r.json()["results"]) == 8


def test_inverted_price_range_is_accepted(client):
    r = client.get("/search", params={"q": "finca", "priceMin": "100", "priceMax": "50"})
    assert r.status_code == 200
    assert "precio 100-50 por noche" in r.json()["enhancedQuery"]


def test_filters_flow_into_enhanced_query(client):
    r = client.get("/search", params={"q": "cortijo", "guests": "6", "location": "Jaén"})
    assert r.json()["enhancedQuery"] == "casa rural alquiler Jaén sierra cortijo para 6 personas"


def test_unparseable_numbers_are_ignored(client):
    r = client.get("/search", params={"q": "villa", "guests": "muchos", "priceMin": "abc"})
    assert r.status_code == 200
    assert r.json()["enhancedQuery"] == "casa rural alquiler sierra villa"


def test_identical_requests_give_identical_results(client):
    params = {"q": "casa con piscina", "guests": "4"}
    a, b = client.get("/search", params=params).json(), client.get("/search", params=params).json()
    assert a["enhancedQuery"] == b["enhancedQuery"]
    assert a["results"] == b["results"]


def test_model_is_used_when_configured(monkeypatch):
    model = FakeModel("casa rural sierra de grazalema", "no es json")
    monkeypatch.setattr(search_api, "get_text_model", lambda cfg: model)
    c = TestClient(create_app(make_settings(gemini_api_key="g")))
    body = c.get("/search", params={"q": "grazalema"}).json()
    assert body["enhancedQuery"] == "casa rural sierra de grazalema"
    assert len(body["results"]) == 8


def test_unexpected_error_is_500_without_details(monkeypatch):
    def boom(*a, **kw):
        raise RuntimeError("secret internal detail")

    monkeypatch.setattr(search_api, "search_service", boom)
    c = TestClient(create_app(make_settings()))
    r = c.get("/search", params={"q": "casa"})
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Internal server error"
    assert "secret" not in body["message"]


def test_get_text_model_none_without_key():
    assert llm.get_text_model(make_settings()) is None
    assert llm.get_text_model(make_settings(llm_provider="openai", gemini_api_key="g")) is None


def test_get_text_model_none_when_sdk_unavailable(monkeypatch):
    def broken(*a, **kw):
        raise ImportError("no sdk")

    monkeypatch.setattr(llm, "GeminiModel", broken)
    assert llm.get_text_model(make_settings(gemini_api_key="g")) is None


def test_healthz_reports_keys_without_values():
    c = TestClient(create_app(make_settings(serpapi_key="secret-serp")))
    body = c.get("/healthz").json()
    assert body["status"] == "ok"
    assert body["search_config"]["env_keys_present"]["SERPAPI_KEY"] is True
    assert body["search_config"]["env_keys_present"]["GEMINI_API_KEY"] is False
    assert "secret-serp" not in str(body)


@pytest.mark.parametrize("body", [{"organic_results": 5}, {"webPages": ["x"]}])
def test_wrong_shaped_provider_body_degrades_to_mock(monkeypatch, body):
    monkeypatch.setattr(httpx, "get", lambda url, **kw: json_response(url, body))
    cfg = make_settings(serpapi_key="k", bing_search_key="bk", bing_search_endpoint="https://bing.test/search")
    r = TestClient(create_app(cfg)).get("/search", params={"q": "casa"})
    assert r.status_code == 200
    assert [x["location"] for x in r.json()["results"]] == PROVINCES
