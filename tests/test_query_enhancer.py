from rural_search.search.schema import SearchFilters
from rural_search.services.query_enhancer import enhance_query, rule_based_query, build_prompt

from conftest import FakeModel


def test_rule_based_query_no_filters():
    q = enhance_query("casa con piscina", SearchFilters(), None)
    assert q == "casa rural alquiler sierra casa con piscina"
    for term in ("casa rural", "alquiler", "sierra", "casa con piscina"):
        assert term in q


def test_rule_based_query_with_all_filters():
    f = SearchFilters(guests=4, price_min=60, price_max=120.5, location="Granada")
    q = rule_based_query("cortijo", f)
    assert q == "casa rural alquiler Granada sierra cortijo precio 60-120.5 por noche para 4 personas"


def test_rule_based_query_single_price_bound():
    q = rule_based_query("villa", SearchFilters(price_max=90))
    assert q.endswith("precio -90 por noche")


def test_rule_based_query_inverted_price_range_is_kept():
    q = rule_based_query("finca", SearchFilters(price_min=100, price_max=50))
    assert "precio 100-50 por noche" in q


def test_rule_based_query_is_deterministic():
    f = SearchFilters(guests=2, location="Jaén")
    assert rule_based_query("olivar", f) == rule_based_query("olivar", f)


def test_model_answer_first_line_is_used():
    model = FakeModel('\n"cortijo sierra nevada alquiler rural piscina"\nexplicación extra')
    q = enhance_query("casa con piscina", SearchFilters(location="Granada"), model)
    assert q == "cortijo sierra nevada alquiler rural piscina"
    assert "casa con piscina" in model.prompts[0]
    assert "Granada" in model.prompts[0]


def test_model_failure_uses_fixed_fallback(degraded):
    model = FakeModel(error=degraded)
    assert enhance_query("casa con piscina", SearchFilters(), model) == "casa rural alquiler Andalucía casa con piscina"


def test_unexpected_model_error_uses_fixed_fallback():
    model = FakeModel(error=RuntimeError("quota"))
    assert enhance_query("x", SearchFilters(), model) == "casa rural alquiler Andalucía x"


def test_blank_completion_uses_fixed_fallback():
    model = FakeModel("   \n  \n")
    assert enhance_query("x", SearchFilters(), model) == "casa rural alquiler Andalucía x"


def test_prompt_defaults_when_no_filters():
    p = build_prompt("casa", SearchFilters())
    assert "cualquiera en Andalucía" in p
    assert "no especificado" in p
    assert "- a -" in p


def test_large_and_fractional_prices_are_printed_exactly():
    q = rule_based_query("x", SearchFilters(price_min=1500000, price_max=1234567))
    assert q.endswith("precio 1500000-1234567 por noche")
    q = rule_based_query("x", SearchFilters(price_min=85.125, price_max=99.99))
    assert q.endswith("precio 85.125-99.99 por noche")
