"""
Tests for the HTML fragments: upsell card, loading skeleton and the
squad chemistry debug panel.
"""

import pytest

from futdash.api.schemas.squad import ChemDebug, ChemDebugRequest
from futdash.entitlements.upsell import (
    DEFAULT_UPSELL_TITLE,
    render_skeleton,
    render_upsell_card,
)
from futdash.squad.chem_debug import EMPTY_VALUE, render_chem_debug


# ============================================================================
# UPSELL / SKELETON
# ============================================================================

class TestUpsellCard:

    def test_default_copy_and_links(self):
        html = render_upsell_card(from_path="/smart-buy?x=1")

        assert DEFAULT_UPSELL_TITLE in html
        assert 'href="/billing?from=%2Fsmart-buy%3Fx%3D1"' in html
        assert 'href="/pricing"' in html
        assert ">Upgrade<" in html
        assert ">See plans<" in html

    def test_without_location_links_to_bare_billing(self):
        assert 'href="/billing"' in render_upsell_card()

    def test_custom_text_is_escaped(self):
        html = render_upsell_card(title="<b>Pro</b>", message="Tom & Jerry")

        assert "&lt;b&gt;Pro&lt;/b&gt;" in html
        assert "Tom &amp; Jerry" in html
        assert "<b>" not in html

    def test_pricing_path_from_environment(self, monkeypatch):
        from futdash.config import get_settings

        monkeypatch.setenv("PRICING_PATH", "/plans")
        get_settings.cache_clear()

        assert 'href="/plans"' in render_upsell_card()


class TestSkeleton:

    def test_variants(self):
        assert "h-10" in render_skeleton("inline")
        assert "h-48" in render_skeleton("card")

    def test_unknown_variant_falls_back_to_card(self):
        assert render_skeleton("banner") == render_skeleton("card")

    def test_is_marked_busy(self):
        html = render_skeleton()
        assert 'data-gate="loading"' in html
        assert 'aria-busy="true"' in html


# ============================================================================
# CHEM DEBUG
# ============================================================================

@pytest.fixture
def chem_debug() -> ChemDebug:
    return ChemDebug.model_validate({
        "clubs": {"Real Madrid": 3, "Arsenal": 1},
        "nations": {"France": 2},
        "leagues": {"LaLiga": 3},
        "inPosContributors": ["Mbappé", "Bellingham"],
        "icons": [],
        "heroes": ["Ginola"],
        "rows": [
            {
                "id": "p1",
                "name": "Mbappé",
                "slot": "ST",
                "inPos": True,
                "positions": "ST, LW",
                "club": "Real Madrid",
                "nation": "France",
                "league": "LaLiga",
            },
            {
                "id": "p2",
                "name": "Saka",
                "slot": "CAM",
                "inPos": False,
                "positions": "RW",
                "club": "Arsenal",
            },
        ],
    })


class TestChemDebugPanel:

    def test_disabled_renders_nothing(self):
        assert render_chem_debug(None, {"p1": 3}) == ""

    def test_counts_columns(self, chem_debug):
        html = render_chem_debug(chem_debug, {})

        for title in ("Clubs", "Nations", "Leagues"):
            assert f">{title}<" in html
        assert "<span>Real Madrid</span><span>3</span>" in html
        assert "<span>France</span><span>2</span>" in html

    def test_contributor_lists_and_empty_placeholder(self, chem_debug):
        html = render_chem_debug(chem_debug, {})

        assert "In-position contributors: Mbappé, Bellingham" in html
        assert f"Icons (3/3): {EMPTY_VALUE}" in html
        assert "Heroes (3/3): Ginola" in html

    def test_player_rows(self, chem_debug):
        html = render_chem_debug(chem_debug, {"p1": 3})

        assert "<td>Mbappé</td><td>ST</td>" in html
        assert '<td class="text-green-400">true</td>' in html
        assert '<td class="text-red-400">false</td>' in html
        # p2 has no nation/league and no chem entry
        assert f"<td>Arsenal</td><td>{EMPTY_VALUE}</td><td>{EMPTY_VALUE}</td><td>0</td>" in html
        assert "<td>LaLiga</td><td>3</td>" in html

    def test_names_are_escaped(self):
        debug = ChemDebug(rows=[{"id": "x", "name": "<script>", "slot": "GK"}])

        html = render_chem_debug(debug, {})

        assert "&lt;script&gt;" in html
        assert "<script>" not in html

    def test_request_accepts_camel_and_snake_case(self):
        camel = ChemDebugRequest.model_validate({"perPlayerChem": {"p1": 2}})
        snake = ChemDebugRequest.model_validate({"per_player_chem": {"p1": 2}})

        assert camel.per_player_chem == snake.per_player_chem == {"p1": 2}
        assert camel.debug is None
