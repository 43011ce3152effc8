"""HTML rendering of a stylist session.

Rendering is a pure function of :class:`StylistSession`; the browser only
posts actions to the JSON API and reloads. While a request is outstanding the
page reloads itself until the state settles.
"""

from __future__ import annotations

from html import escape
from typing import Iterable

from logic.view_state import ResultsView
from memory.session_store import ChatVisibility, StylistSession
from models.catalog import OCCASIONS, WEATHERS, CatalogEntry
from models.recommendation import Message, Recommendation, Role

POLL_INTERVAL_MS = 1200

_STYLES = """
body{font-family:system-ui,sans-serif;margin:0;background:#fafafa;color:#18181b}
.page{max-width:72rem;margin:0 auto;padding:2rem 1rem;display:flex;flex-direction:column;align-items:center}
header{text-align:center;margin-bottom:3rem}
header h1{font-family:Georgia,serif;font-size:4rem;margin:0 0 1rem}
header p{color:#71717a;text-transform:uppercase;letter-spacing:.2em;font-size:.75rem;font-weight:600}
main{width:100%;display:grid;grid-template-columns:1fr 2fr;gap:2rem}
.panel{background:#fff;padding:1.5rem;border-radius:1.5rem;border:1px solid #f4f4f5;margin-bottom:2rem}
.panel h2{font-size:.85rem;text-transform:uppercase;letter-spacing:.05em;margin:0 0 1.5rem}
.tiles{display:grid;gap:.75rem}
.tiles.occasions{grid-template-columns:repeat(2,1fr)}
.tiles.weathers{grid-template-columns:repeat(3,1fr)}
.tile{display:flex;flex-direction:column;align-items:center;padding:1rem;border-radius:1rem;border:1px solid transparent;background:#fafafa;color:#52525b;cursor:pointer}
.tile.selected{background:#000;color:#fff;border-color:#000}
.tile span.label{font-size:.65rem;margin-top:.5rem}
.curate{width:100%;padding:1.25rem;background:#000;color:#fff;border:0;border-radius:999px;font-weight:700;text-transform:uppercase;letter-spacing:.1em;cursor:pointer}
.curate:disabled{opacity:.3;cursor:not-allowed}
.placeholder{min-height:400px;display:flex;flex-direction:column;align-items:center;justify-content:center;text-align:center;padding:3rem;background:#fafafa;border-radius:2.5rem;border:2px dashed #e4e4e7}
.cards{display:grid;grid-template-columns:1fr 1fr;gap:1.5rem}
.card{background:#fff;padding:2rem;border-radius:2.5rem;border:1px solid #f4f4f5}
.card.wide{grid-column:span 2}
.card.tips{background:#000;color:#d4d4d8;font-style:italic}
.card h3{font-family:Georgia,serif;margin-top:0}
.advice{width:100%;margin-top:1.5rem;padding:1rem;border:0;border-radius:999px;background:#f4f4f5;font-weight:700;cursor:pointer}
.backdrop{position:fixed;inset:0;background:rgba(0,0,0,.4);z-index:40}
.drawer{position:fixed;right:0;top:0;height:100%;width:100%;max-width:28rem;background:#fff;z-index:50;display:flex;flex-direction:column}
.drawer-head{padding:1.5rem;border-bottom:1px solid #f4f4f5;display:flex;justify-content:space-between;align-items:center}
.drawer-head small{color:#a1a1aa;text-transform:uppercase;letter-spacing:.1em;font-size:.6rem}
.transcript{flex:1;overflow-y:auto;padding:1.5rem}
.bubble{max-width:85%;padding:1rem;border-radius:1.5rem;margin-bottom:1rem;font-size:.9rem}
.bubble.user{background:#000;color:#fff;margin-left:auto}
.bubble.model{background:#f4f4f5;color:#27272a}
.composer{padding:1.5rem;border-top:1px solid #f4f4f5;display:flex;gap:.5rem}
.composer input{flex:1;padding:1rem 1.5rem;border:1px solid #e4e4e7;border-radius:999px}
footer{margin-top:5rem;color:#a1a1aa;font-size:.65rem;text-transform:uppercase;letter-spacing:.3em}
"""

_SCRIPT = """
const sessionId = document.body.dataset.session;
async function act(path, body) {
  await fetch(`/api/sessions/${sessionId}/${path}`, {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify(body || {}),
  });
  location.reload();
}
function sendChat() {
  const input = document.getElementById("chat-input");
  const text = input.value;
  if (!text.trim()) return;
  input.value = "";
  act("chat/messages", {text: text, wait: false});
}
const chatEnd = document.getElementById("chat-end");
if (chatEnd) chatEnd.scrollIntoView({behavior: "smooth"});
"""


def render_page(session: StylistSession) -> str:
    """Render the full page for ``session``."""

    polling = session.loading or session.chat_loading
    poll_script = f"setTimeout(() => location.reload(), {POLL_INTERVAL_MS});" if polling else ""
    return (
        "<!doctype html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        "<title>AuraStyle</title>"
        f"<style>{_STYLES}</style></head>"
        f'<body data-session="{escape(session.session_id)}"><div class="page">'
        "<header><h1>AuraStyle</h1><p>Your Personal AI Fashion Stylist</p></header>"
        "<main>"
        f"{render_selection_panel(session)}"
        f'<section class="results">{render_results(session)}</section>'
        "</main>"
        f"{render_chat_drawer(session)}"
        "<footer>&copy; 2026 AuraStyle &bull; Powered by Gemini</footer>"
        f"</div><script>{_SCRIPT}{poll_script}</script></body></html>"
    )


def _tiles(entries: Iterable[CatalogEntry], selected: object, action: str, css: str) -> str:
    buttons = []
    for entry in entries:
        state = " selected" if entry.value == selected else ""
        buttons.append(
            f'<button class="tile{state}" data-label="{escape(entry.label)}" '
            f"onclick='act(\"{action}\", {{label: this.dataset.label}})'>"
            f'<span class="icon">{entry.icon}</span><span class="label">{escape(entry.label)}</span></button>'
        )
    return f'<div class="tiles {css}">{"".join(buttons)}</div>'


def render_selection_panel(session: StylistSession) -> str:
    if session.loading:
        trigger_label = "Curating&hellip;"
    elif session.last_request_failed:
        trigger_label = "Try Again"
    else:
        trigger_label = "Curate My Look"
    disabled = "" if session.can_request else " disabled"
    return (
        '<section class="selection">'
        '<div class="panel"><h2>&rsaquo; Select Occasion</h2>'
        f"{_tiles(OCCASIONS, session.occasion, 'occasion', 'occasions')}</div>"
        '<div class="panel"><h2>&rsaquo; Current Weather</h2>'
        f"{_tiles(WEATHERS, session.weather, 'weather', 'weathers')}</div>"
        f'<button class="curate" onclick=\'act("recommendation", {{wait: false}})\'{disabled}>'
        f"{trigger_label}</button>"
        "</section>"
    )


def render_results(session: StylistSession) -> str:
    view = session.results_view
    if view is ResultsView.LOADING:
        return (
            '<div class="placeholder" data-view="loading">'
            "<h3>Curating your perfect look...</h3>"
            "<p>Our AI stylist is analyzing trends and conditions.</p></div>"
        )
    if view is ResultsView.RESULT and session.recommendation is not None:
        return render_recommendation(session.recommendation)
    return (
        '<div class="placeholder" data-view="empty">'
        "<h3>Ready to be styled?</h3>"
        "<p>Select your occasion and weather to receive a personalized fashion recommendation.</p></div>"
    )


def render_recommendation(recommendation: Recommendation) -> str:
    return (
        '<div data-view="result"><div class="cards">'
        f'<div class="card wide"><h3>The Outfit</h3><p>{escape(recommendation.outfit)}</p></div>'
        f'<div class="card"><h3>Footwear</h3><p>{escape(recommendation.footwear)}</p></div>'
        f'<div class="card"><h3>Accessories</h3><p>{escape(recommendation.accessories)}</p></div>'
        f'<div class="card wide tips"><h3>Styling Tips</h3><p>&ldquo;{escape(recommendation.styling_tips)}&rdquo;</p></div>'
        "</div>"
        "<button class=\"advice\" onclick='act(\"chat/open\")'>Ask Stylist for Advice</button>"
        "</div>"
    )


def _bubble(message: Message) -> str:
    role = "user" if message.role is Role.USER else "model"
    return f'<div class="bubble {role}">{escape(message.text)}</div>'


def render_chat_drawer(session: StylistSession) -> str:
    if session.chat_visibility is not ChatVisibility.OPEN:
        return ""
    typing = '<div class="bubble model typing">&bull; &bull; &bull;</div>' if session.chat_loading else ""
    disabled = " disabled" if session.chat_loading else ""
    return (
        "<div class=\"backdrop\" onclick='act(\"chat/close\")'></div>"
        '<aside class="drawer">'
        '<div class="drawer-head"><div><strong>Styling Assistant</strong><br><small>Online</small></div>'
        "<button onclick='act(\"chat/close\")' aria-label=\"Close\">&rsaquo;</button></div>"
        f'<div class="transcript">{"".join(_bubble(m) for m in session.messages)}{typing}'
        '<div id="chat-end"></div></div>'
        '<div class="composer">'
        '<input id="chat-input" type="text" placeholder="Ask about colors, fit, or alternatives..." '
        "onkeydown='if (event.key === \"Enter\") sendChat()'>"
        f'<button onclick="sendChat()"{disabled}>Send</button></div>'
        "</aside>"
    )


__all__ = ["render_page", "render_results", "render_recommendation", "render_chat_drawer"]
