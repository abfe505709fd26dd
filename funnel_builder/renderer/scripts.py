"""
Blocs de conversion — markup + script inline (popup, countdown, sticky bar).

Toute valeur injectée dans un script passe par `js_literal` (JSON, `</` neutralisé) ;
toute valeur injectée dans un attribut passe par `escape_html`.
"""
import json
from typing import Any

from .. import config
from ..blocks.conversion import CountdownTimerProps, PopupProps, StickyBarProps
from .escape import escape_html


def js_literal(value: Any) -> str:
    """Littéral JS sûr à placer dans un <script>."""
    return json.dumps(value).replace("</", "<\\/")


def _number(value: Any, default: float) -> float:
    try:
        n = float(str(value).strip().rstrip("%s"))
    except (TypeError, ValueError):
        return default
    return int(n) if n.is_integer() else n


def _style(*parts: str) -> str:
    return ";".join(p.strip(";") for p in parts if p and p.strip(";"))


# ── Popup ───────────────────────────────────────────────────────────────────

_POPUP_POSITIONS = {
    "center":     "top:50%;left:50%;transform:translate(-50%, -50%)",
    "top":        "top:20px;left:50%;transform:translateX(-50%)",
    "bottom":     "bottom:20px;left:50%;transform:translateX(-50%)",
    "slideRight": "top:50%;right:20px;transform:translateY(-50%)",
}


def render_popup(block_id: str, p: PopupProps, style: str, inner: str) -> str:
    popup_id   = f"popup-{block_id}"
    overlay_id = f"popup-overlay-{block_id}"

    if p.trigger == "button":
        trigger_value = js_literal(str(p.trigger_value))
    else:
        trigger_value = js_literal(_number(p.trigger_value, 50))

    hide_popup   = f"document.getElementById({js_literal(popup_id)}).style.display='none';"
    hide_overlay = f"document.getElementById({js_literal(overlay_id)}).style.display='none';"

    overlay_html = ""
    if p.overlay:
        overlay_style = _style("display:none;position:fixed;top:0;left:0;width:100%;height:100%",
                               f"background:{escape_html(p.overlay_color)}", "z-index:9998")
        overlay_html = (f'<div id="{escape_html(overlay_id)}" style="{overlay_style}" '
                        f'onclick="{escape_html(hide_popup)}this.style.display=\'none\';"></div>')

    close_html = ""
    if p.close_button:
        close_js = hide_popup + (hide_overlay if p.overlay else "")
        close_html = (f'<button type="button" aria-label="Close" onclick="{escape_html(close_js)}" '
                      f'style="position:absolute;top:10px;right:10px;background:transparent;border:none;'
                      f'font-size:24px;cursor:pointer;color:#999;">&times;</button>')

    popup_style = _style("position:fixed", _POPUP_POSITIONS[p.position], style, "z-index:9999", "display:none")

    return f"""{overlay_html}
<div id="{escape_html(popup_id)}" style="{popup_style}" class="popup-{p.animation}" role="dialog">
  {close_html}
  {inner}
</div>
<script>
(function() {{
  var popup = document.getElementById({js_literal(popup_id)});
  var overlay = document.getElementById({js_literal(overlay_id)});
  var trigger = {js_literal(p.trigger)};
  var triggerValue = {trigger_value};
  var shown = false;
  function showPopup() {{
    if (overlay) overlay.style.display = 'block';
    popup.style.display = 'block';
  }}
  function showOnce() {{
    if (shown) return;
    shown = true;
    showPopup();
  }}
  if (trigger === 'exitIntent') {{
    document.addEventListener('mouseout', function(e) {{
      if (!e.relatedTarget && e.clientY < 10) showOnce();
    }});
  }} else if (trigger === 'scroll') {{
    window.addEventListener('scroll', function() {{
      var max = document.body.scrollHeight - window.innerHeight;
      var percent = max > 0 ? (window.scrollY / max) * 100 : 100;
      if (percent >= triggerValue) showOnce();
    }});
  }} else if (trigger === 'time') {{
    setTimeout(showOnce, triggerValue * 1000);
  }} else if (trigger === 'button') {{
    var btn = document.getElementById(triggerValue);
    if (btn) btn.addEventListener('click', showPopup);
  }}
}})();
</script>"""


# ── Countdown timer ─────────────────────────────────────────────────────────

def format_remaining(seconds: int, fmt: str = "HH:MM:SS") -> str:
    """Même formatage que le script client (valeur initiale rendue côté serveur)."""
    seconds = max(0, int(seconds))
    if fmt == "HH:MM:SS":
        return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"
    if fmt == "MM:SS":
        return f"{seconds // 60:02d}:{seconds % 60:02d}"
    return f"{seconds // 86400}d {seconds % 86400 // 3600}h {seconds % 3600 // 60}m"


def render_countdown(block_id: str, p: CountdownTimerProps, style: str) -> str:
    timer_id = f"timer-{block_id}"
    duration = p.duration if p.duration > 0 else 600
    initial  = "" if p.end_date else format_remaining(duration, p.format)

    before = f'<div class="countdown__before">{escape_html(p.text_before)}</div>' if p.text_before else ""
    after  = f'<div class="countdown__after">{escape_html(p.text_after)}</div>' if p.text_after else ""

    return f"""<div style="{_style(style, 'text-align:center')}">
  {before}
  <div id="{escape_html(timer_id)}" style="font-weight:700;font-family:monospace;">{initial}</div>
  {after}
</div>
<script>
(function() {{
  var el = document.getElementById({js_literal(timer_id)});
  var format = {js_literal(p.format)};
  var expiredText = {js_literal(p.expired_text)};
  var duration = {duration};
  var endDate = {js_literal(p.end_date)};
  var persistent = {js_literal(p.persistent)};
  var storageKey = {js_literal("countdown_" + block_id)};
  var deadline;

  if (endDate) {{
    deadline = Date.parse(endDate);
  }} else if (persistent) {{
    var stored = null;
    try {{ stored = JSON.parse(localStorage.getItem(storageKey) || 'null'); }} catch (e) {{}}
    if (stored && stored.endTime) {{
      deadline = stored.endTime;
    }} else {{
      deadline = Date.now() + duration * 1000;
      try {{ localStorage.setItem(storageKey, JSON.stringify({{ endTime: deadline }})); }} catch (e) {{}}
    }}
  }} else {{
    deadline = Date.now() + duration * 1000;
  }}

  function pad(n) {{ return String(n).padStart(2, '0'); }}

  function formatTime(s) {{
    if (format === 'HH:MM:SS') {{
      return pad(Math.floor(s / 3600)) + ':' + pad(Math.floor((s % 3600) / 60)) + ':' + pad(s % 60);
    }} else if (format === 'MM:SS') {{
      return pad(Math.floor(s / 60)) + ':' + pad(s % 60);
    }}
    return Math.floor(s / 86400) + 'd ' + Math.floor((s % 86400) / 3600) + 'h ' + Math.floor((s % 3600) / 60) + 'm';
  }}

  function tick() {{
    var left = Math.floor((deadline - Date.now()) / 1000);
    if (!(left > 0)) {{
      el.textContent = expiredText;
      return;
    }}
    el.textContent = formatTime(left);
    setTimeout(tick, 1000);
  }}

  tick();
}})();
</script>"""


# ── Sticky bar ──────────────────────────────────────────────────────────────

def render_sticky_bar(block_id: str, p: StickyBarProps, style: str, inner: str) -> str:
    bar_id   = f"sticky-bar-{block_id}"
    position = "top:0" if p.position == "top" else "bottom:0"
    hidden   = "display:none" if p.show_on != "always" else ""

    close_html = ""
    if p.dismissible:
        close_html = ('<button type="button" data-sticky-dismiss aria-label="Close" '
                      'style="position:absolute;top:10px;right:10px;background:transparent;border:none;'
                      'font-size:20px;cursor:pointer;color:#999;">&times;</button>')

    bar_style = _style("position:fixed", position, "left:0;width:100%", style, "z-index:9000", hidden)

    return f"""<div id="{escape_html(bar_id)}" style="{bar_style}">
  {close_html}
  {inner}
</div>
<script>
(function() {{
  var bar = document.getElementById({js_literal(bar_id)});
  var showOn = {js_literal(p.show_on)};
  var scrollThreshold = {int(p.scroll_threshold)};
  var mobileMaxWidth = {int(config.MOBILE_MAX_WIDTH)};
  var dismissed = false;

  // Fermeture : masque la barre pour cette page vue, sans la retirer du DOM
  var buttons = bar.querySelectorAll('[data-sticky-dismiss]');
  for (var i = 0; i < buttons.length; i++) {{
    buttons[i].addEventListener('click', function() {{
      dismissed = true;
      bar.style.display = 'none';
    }});
  }}

  function update() {{
    if (dismissed) return;
    var visible = true;
    if (showOn === 'scroll') visible = window.scrollY > scrollThreshold;
    else if (showOn === 'mobile') visible = window.innerWidth <= mobileMaxWidth;
    bar.style.display = visible ? 'block' : 'none';
  }}

  if (showOn === 'scroll') window.addEventListener('scroll', update);
  if (showOn === 'mobile') window.addEventListener('resize', update);
  update();
}})();
</script>"""
