"""
Squad builder routes.

POST /widgets/chem-debug renders the chemistry debug panel from the
breakdown the squad builder already computed.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from futdash.api.schemas.squad import ChemDebugRequest
from futdash.squad.chem_debug import render_chem_debug

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/widgets", tags=["squad"])


@router.post("/chem-debug", response_class=HTMLResponse)
async def chem_debug_fragment(body: ChemDebugRequest):
    """Render the chemistry debug panel (empty when debug is off)."""
    return HTMLResponse(
        content=render_chem_debug(body.debug, body.per_player_chem),
        status_code=200,
    )
