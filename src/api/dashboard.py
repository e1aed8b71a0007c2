"""Inline HTML pages for the blog trigger endpoint.

The operator opens ``/api/blog/trigger?secret=...`` in a browser.  The
status page shows the generator counts, whether a generation API key is
configured and the latest articles, plus a button that calls the same URL
with ``action=generate`` and reloads the page three seconds after a
successful run.

The secret is never rendered into the page; the button's script reuses
the query string of the current URL.
"""

from __future__ import annotations

from html import escape

from src.models.pipeline import GeneratorStats

_STYLE = """
* { box-sizing: border-box; }
body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  background: linear-gradient(to bottom, #0f0f14, #1a1a24);
  color: white;
  padding: 40px 20px;
  max-width: 700px;
  margin: 0 auto;
  min-height: 100vh;
}
h1 { margin-bottom: 8px; }
.subtitle { color: #9ca3af; margin-bottom: 32px; }
.stats { display: grid; grid-template-columns: repeat(2, 1fr); gap: 16px; margin-bottom: 24px; }
.stat { background: rgba(255, 255, 255, 0.05); border-radius: 12px; padding: 20px; }
.stat-value { font-size: 32px; font-weight: bold; color: #fbbf24; }
.stat-label { color: #9ca3af; font-size: 14px; }
.status { padding: 12px 16px; border-radius: 8px; margin-bottom: 24px; }
.status.ok { background: rgba(34, 197, 94, 0.15); color: #4ade80; }
.status.missing { background: rgba(239, 68, 68, 0.15); color: #f87171; }
button {
  width: 100%; padding: 16px; font-size: 18px; font-weight: bold; border: none;
  border-radius: 12px; background: linear-gradient(to right, #f59e0b, #ea580c);
  color: black; cursor: pointer;
}
button:disabled { opacity: 0.5; cursor: wait; }
#result { margin-top: 24px; padding: 16px; border-radius: 8px; display: none;
  background: rgba(255, 255, 255, 0.05); }
ul { padding-left: 20px; }
li { margin-bottom: 8px; }
a { color: #fbbf24; }
.error { color: #ef4444; font-size: 24px; }
"""

_SCRIPT = """
async function generate() {
  const button = document.getElementById('generate');
  const result = document.getElementById('result');
  button.disabled = true;
  button.textContent = 'Generating...';
  result.style.display = 'block';
  result.textContent = 'Working, this can take a minute.';
  try {
    const params = new URLSearchParams(window.location.search);
    params.set('action', 'generate');
    const response = await fetch('?' + params.toString());
    const data = await response.json();
    if (data.success) {
      const items = (data.articles || []).map(
        (a) => '<li><a href="/blog/' + encodeURIComponent(a.slug) + '">' +
               a.article_title.replace(/</g, '&lt;') + '</a></li>'
      ).join('');
      result.innerHTML = '<strong>' + data.message + '</strong>' +
        (items ? '<ul>' + items + '</ul>' : '');
      if (data.processed > 0) {
        setTimeout(() => window.location.reload(), 3000);
      }
    } else {
      result.innerHTML = '<strong>Error:</strong> ' + (data.error || 'Unknown error');
    }
  } catch (err) {
    result.innerHTML = '<strong>Error:</strong> ' + err.message;
  } finally {
    button.disabled = false;
    button.textContent = 'Generate next article';
  }
}
"""


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        f"<title>{escape(title)}</title>\n"
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<style>{_STYLE}</style>\n"
        "</head>\n<body>\n"
        f"{body}\n"
        "</body>\n</html>\n"
    )


def render_unauthorized(site_name: str) -> str:
    """Return the 401 page."""
    return _page(
        f"Unauthorized - {site_name}",
        '<div class="error">401 - Unauthorized. Invalid or missing secret key.</div>',
    )


def render_dashboard(stats: GeneratorStats, site_name: str) -> str:
    """Return the operator status page for *stats*."""
    cards = "".join(
        f'<div class="stat"><div class="stat-value">{value}</div>'
        f'<div class="stat-label">{escape(label)}</div></div>'
        for value, label in (
            (stats.total_articles, "Articles published"),
            (stats.processed_events, "Events blogged"),
            (stats.eligible_events, "Eligible events"),
            (stats.remaining_events, "Remaining events"),
        )
    )

    if stats.llm_configured:
        api_status = (
            '<div class="status ok">Generation API configured '
            f"({escape(stats.llm_provider or 'unknown')})</div>"
        )
    else:
        api_status = '<div class="status missing">Generation API key not configured</div>'

    if stats.recent_articles:
        items = "".join(
            f'<li><a href="/blog/{escape(a.slug)}">{escape(a.title)}</a> '
            f'<small>{a.created_at:%Y-%m-%d %H:%M}</small></li>'
            for a in stats.recent_articles
        )
        recent = f"<h2>Recent articles</h2><ul>{items}</ul>"
    else:
        recent = "<h2>Recent articles</h2><p>No articles yet.</p>"

    body = (
        "<h1>Blog Generator</h1>"
        f'<p class="subtitle">{escape(site_name)} event articles</p>'
        f'<div class="stats">{cards}</div>'
        f"{api_status}"
        '<button id="generate" onclick="generate()">Generate next article</button>'
        '<div id="result"></div>'
        f"{recent}"
        f"<script>{_SCRIPT}</script>"
    )
    return _page(f"Blog Generator - {site_name}", body)
