"""
Scripts de tracking — pixels injectés dans le <head> des pages publiées
et fonction de dispatch `window.trackFunnelEvent` placée en fin de <body>.

Table par provider :
  head(pixel_id)  → snippet d'initialisation du SDK
  dispatch        → appel JS émis dans trackFunnelEvent, derrière un test de présence

Les identifiants de pixel sont encodés en JSON (jamais interpolés bruts).
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional
from urllib.parse import quote

from .. import config
from ..core.schemas import PixelIntegration, PixelProvider
from .escape import escape_html
from .scripts import js_literal

log = logging.getLogger(__name__)


STANDARD_EVENTS: Dict[str, str] = {
    # Page
    "PAGE_VIEW":             "PageView",
    "VIEW_CONTENT":          "ViewContent",
    # Engagement
    "LEAD":                  "Lead",
    "SUBMIT_FORM":           "SubmitForm",
    "COMPLETE_REGISTRATION": "CompleteRegistration",
    # E-commerce
    "ADD_TO_CART":           "AddToCart",
    "INITIATE_CHECKOUT":     "InitiateCheckout",
    "PURCHASE":              "Purchase",
    # Réservation
    "SCHEDULE":              "Schedule",
    "BOOK_CALL":             "BookCall",
    # Libre
    "CUSTOM":                "CustomEvent",
}


@dataclass(frozen=True)
class TrackingScript:
    provider: PixelProvider
    pixel_id: str
    head_script: str


# ── Snippets par provider ───────────────────────────────────────────────────

def _meta_head(pixel_id: str) -> str:
    noscript_src = f"https://www.facebook.com/tr?id={quote(pixel_id, safe='')}&ev=PageView&noscript=1"
    return f"""<!-- Meta Pixel Code -->
<script>
  !function(f,b,e,v,n,t,s) {{
    if(f.fbq) return;
    n=f.fbq=function(){{n.callMethod?n.callMethod.apply(n,arguments):n.queue.push(arguments)}};
    if(!f._fbq) f._fbq=n;
    n.push=n; n.loaded=!0; n.version='2.0';
    n.queue=[];
    t=b.createElement(e);t.async=!0;
    t.src=v;s=b.getElementsByTagName(e)[0];
    s.parentNode.insertBefore(t,s)
  }}(window, document,'script','https://connect.facebook.net/en_US/fbevents.js');
  fbq('init', {js_literal(pixel_id)});
  fbq('track', 'PageView');
</script>
<noscript>
  <img height="1" width="1" style="display:none" src="{escape_html(noscript_src)}"/>
</noscript>
<!-- End Meta Pixel Code -->"""


def _ga4_head(measurement_id: str) -> str:
    src = f"https://www.googletagmanager.com/gtag/js?id={quote(measurement_id, safe='')}"
    return f"""<!-- Google tag (gtag.js) -->
<script async src="{escape_html(src)}"></script>
<script>
  window.dataLayer = window.dataLayer || [];
  function gtag(){{dataLayer.push(arguments);}}
  gtag('js', new Date());
  gtag('config', {js_literal(measurement_id)});
</script>
<!-- End Google Analytics -->"""


def _tiktok_head(pixel_id: str) -> str:
    return f"""<!-- TikTok Pixel Code -->
<script>
  !function (w, d, t) {{
    w.TiktokAnalyticsObject=t;var ttq=w[t]=w[t]||[];
    ttq.methods=["page","track","identify","instances","debug","on","off","once","ready","alias","group","enableCookie","disableCookie"],
    ttq.setAndDefer=function(t,e){{t[e]=function(){{t.push([e].concat(Array.prototype.slice.call(arguments,0)))}}}};
    for(var i=0;i<ttq.methods.length;i++)ttq.setAndDefer(ttq,ttq.methods[i]);
    ttq.instance=function(t){{for(var e=ttq._i[t]||[],n=0;n<ttq.methods.length;n++)ttq.setAndDefer(e,ttq.methods[n]);return e}},
    ttq.load=function(e,n){{var i="https://analytics.tiktok.com/i18n/pixel/events.js";
    ttq._i=ttq._i||{{}},ttq._i[e]=[],ttq._i[e]._u=i,ttq._t=ttq._t||{{}},ttq._t[e]=+new Date,ttq._o=ttq._o||{{}},ttq._o[e]=n||{{}};
    n=document.createElement("script");n.type="text/javascript",n.async=!0,n.src=i+"?sdkid="+e+"&lib="+t;
    e=document.getElementsByTagName("script")[0];e.parentNode.insertBefore(n,e)}};
    ttq.load({js_literal(pixel_id)});
    ttq.page();
  }}(window, document, 'ttq');
</script>
<!-- End TikTok Pixel Code -->"""


@dataclass(frozen=True)
class _Provider:
    head: Callable[[str], str]
    dispatch: Optional[str]


_PROVIDERS: Dict[PixelProvider, _Provider] = {
    PixelProvider.META_PIXEL: _Provider(
        head=_meta_head,
        dispatch="if (window.fbq) { window.fbq('track', name, params); }",
    ),
    PixelProvider.GOOGLE_ANALYTICS: _Provider(
        head=_ga4_head,
        dispatch="if (window.gtag) { window.gtag('event', name, params); }",
    ),
    PixelProvider.TIKTOK_PIXEL: _Provider(
        head=_tiktok_head,
        dispatch="if (window.ttq) { window.ttq.track(name, params); }",
    ),
}


# ── Génération ──────────────────────────────────────────────────────────────

def _enabled(integrations: Iterable[PixelIntegration]) -> List[PixelIntegration]:
    return [i for i in integrations if i.enabled]


def generate_tracking_script(integration: PixelIntegration) -> Optional[TrackingScript]:
    """Snippet <head> d'une intégration ; None si le provider n'est pas géré."""
    if integration.provider == PixelProvider.CUSTOM:
        script = str((integration.metadata or {}).get("script") or "")
        return TrackingScript(provider=PixelProvider.CUSTOM, pixel_id="custom", head_script=script)

    provider = _PROVIDERS.get(integration.provider)
    if provider is None:
        log.warning("Provider de tracking inconnu : %s (ignoré)", integration.provider)
        return None
    return TrackingScript(
        provider=integration.provider,
        pixel_id=integration.pixel_id,
        head_script=provider.head(integration.pixel_id),
    )


def generate_tracking_scripts(integrations: Iterable[PixelIntegration]) -> List[TrackingScript]:
    """Intégrations actives uniquement, dans l'ordre reçu."""
    scripts = []
    for integration in _enabled(integrations):
        script = generate_tracking_script(integration)
        if script is not None:
            scripts.append(script)
    return scripts


def generate_dispatch_script(
    integrations: Optional[Iterable[PixelIntegration]] = None,
    debug: Optional[bool] = None,
) -> str:
    """
    `window.trackFunnelEvent(eventType, eventName, parameters)`.

    Sans liste d'intégrations, tous les providers connus sont câblés (chacun
    reste protégé par son test de présence, un SDK absent ne lève jamais).
    """
    if integrations is None:
        providers = list(_PROVIDERS)
    else:
        providers = []
        for integration in _enabled(integrations):
            if integration.provider in _PROVIDERS and integration.provider not in providers:
                providers.append(integration.provider)

    debug = config.TRACKING_DEBUG if debug is None else debug
    lines = [f"    {_PROVIDERS[p].dispatch}" for p in providers]
    if debug:
        lines.append("    console.log('[Funnel Tracking]', eventType, eventName, parameters);")
    body = "\n".join(lines)

    return f"""<script>
  window.trackFunnelEvent = function(eventType, eventName, parameters) {{
    var name = eventName || eventType;
    var params = parameters || {{}};
{body}
  }};
</script>"""
