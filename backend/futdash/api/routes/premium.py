"""
Premium dashboard routes.

Full pages (route mode) redirect denied users to login or billing.
Widget fragments (widget mode) render an upsell card in place instead.

The page and widget bodies are placeholders the dashboard frontend
hydrates; only the gating is implemented server-side.
"""

import logging
from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from futdash.entitlements.dependencies import (
    deal_confidence_widget,
    require_advanced_analytics,
    require_smart_buy,
    require_trade_finder,
    smart_buyer_widget,
)
from futdash.entitlements.models import EntitlementSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(tags=["premium"])


def _page(title: str, page_key: str) -> HTMLResponse:
    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{escape(title)}</title>
</head>
<body>
    <main id="app" data-page="{escape(page_key)}"></main>
</body>
</html>"""
    return HTMLResponse(content=html_content, status_code=200)


def _widget(widget_key: str, snapshot: EntitlementSnapshot) -> HTMLResponse:
    return HTMLResponse(
        content=(
            f'<div data-widget="{escape(widget_key)}" '
            f'data-premium="{"true" if snapshot.is_premium else "false"}"></div>'
        ),
        status_code=200,
    )


# =============================================================================
# Pages (route mode)
# =============================================================================

@router.get("/smart-buy", response_class=HTMLResponse)
async def smart_buy_page(snapshot: EntitlementSnapshot = Depends(require_smart_buy)):
    """Smart Buy AI."""
    return _page("Smart Buy AI", "smart-buy")


@router.get("/trade-finder", response_class=HTMLResponse)
async def trade_finder_page(snapshot: EntitlementSnapshot = Depends(require_trade_finder)):
    """Advanced Trade Finder."""
    return _page("Advanced Trade Finder", "trade-finder")


@router.get("/advanced-analytics", response_class=HTMLResponse)
async def advanced_analytics_page(
    snapshot: EntitlementSnapshot = Depends(require_advanced_analytics),
):
    """Advanced Analytics."""
    return _page("Advanced Analytics", "advanced-analytics")


# =============================================================================
# Widgets (widget mode)
# =============================================================================

@router.get("/widgets/smart-buyer", response_class=HTMLResponse)
async def smart_buyer_fragment(snapshot: EntitlementSnapshot = Depends(smart_buyer_widget)):
    return _widget("smart-buyer", snapshot)


@router.get("/widgets/deal-confidence", response_class=HTMLResponse)
async def deal_confidence_fragment(
    snapshot: EntitlementSnapshot = Depends(deal_confidence_widget),
):
    return _widget("deal-confidence", snapshot)
