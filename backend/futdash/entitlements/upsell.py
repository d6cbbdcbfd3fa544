"""
HTML fragments shown by the access gate in widget mode.

- render_upsell_card: default fallback when a premium widget is denied
- render_skeleton: default placeholder while entitlements are resolving

Fragments are injected into the dashboard as-is, so every dynamic value is
HTML-escaped.
"""

from html import escape
from typing import Optional

from futdash.config import get_settings
from futdash.entitlements.redirects import billing_redirect

DEFAULT_UPSELL_TITLE = "This feature is Premium"
DEFAULT_UPSELL_MESSAGE = (
    "Upgrade to unlock Smart Buy, Smart Trending, advanced alerts, and more."
)

# Skeleton heights follow the dashboard's inline and card layouts
_SKELETON_CLASSES = {
    "inline": "h-10 animate-pulse bg-slate-800/40 rounded-xl",
    "card": "h-48 animate-pulse bg-slate-800/40 rounded-2xl",
}


def render_upsell_card(
    title: str = DEFAULT_UPSELL_TITLE,
    message: str = DEFAULT_UPSELL_MESSAGE,
    from_path: Optional[str] = None,
) -> str:
    """
    Render the upgrade prompt.

    Args:
        title: Card heading
        message: Body copy
        from_path: Location the user was on; carried to billing as return-to

    Returns:
        HTML fragment
    """
    upgrade_href = billing_redirect(from_path)
    pricing_href = get_settings().pricing_path
    return (
        '<div class="upsell-card rounded-2xl border p-6 shadow-sm" data-gate="upsell">'
        f'<h3 class="text-lg font-semibold mb-2">{escape(title)}</h3>'
        f'<p class="text-sm opacity-80 mb-4">{escape(message)}</p>'
        '<div class="flex gap-3">'
        f'<a class="upsell-upgrade" href="{escape(upgrade_href)}">Upgrade</a>'
        f'<a class="upsell-plans" href="{escape(pricing_href)}">See plans</a>'
        "</div>"
        "</div>"
    )


def render_skeleton(variant: str = "card") -> str:
    """Neutral loading placeholder. Unknown variants fall back to "card"."""
    css = _SKELETON_CLASSES.get(variant, _SKELETON_CLASSES["card"])
    return f'<div class="{css}" data-gate="loading" aria-busy="true"></div>'
