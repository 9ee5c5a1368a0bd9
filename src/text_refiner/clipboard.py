"""Browser-side copy button for the output panel.

The clipboard write has to run inside the user's click in the same
document, so the button and its handler ship together as one HTML snippet.
"""

from __future__ import annotations

import html
import json

COPY_LABEL = "Copy"
COPIED_LABEL = "Copied!"
FAILED_LABEL = "Copy failed"

_BUTTON_STYLE = (
    "font: 500 0.875rem 'Source Sans Pro', sans-serif; padding: 0.25rem 0.75rem; "
    "border: 1px solid rgba(49, 51, 63, 0.2); border-radius: 0.5rem; "
    "background: #fff; cursor: pointer;"
)


def _js_literal(value: str) -> str:
    """JSON-encode a string so it is safe inside an inline <script>."""
    return json.dumps(value).replace("</", "<\\/")


def copy_button_html(text: str, *, feedback_seconds: float = 2.0) -> str:
    """Return a button that copies ``text`` on click.

    The label switches to "Copied!" (or "Copy failed" when the browser
    refuses) and reverts after ``feedback_seconds``.
    """
    feedback_ms = int(feedback_seconds * 1000)
    return f"""\
<button id="copy-btn" type="button" style="{_BUTTON_STYLE}">{html.escape(COPY_LABEL)}</button>
<script>
const payload = {_js_literal(text)};
const button = document.getElementById("copy-btn");
let resetTimer = null;
button.onclick = async () => {{
  try {{
    await navigator.clipboard.writeText(payload);
    button.textContent = {_js_literal(COPIED_LABEL)};
  }} catch (err) {{
    console.error("Clipboard write failed", err);
    button.textContent = {_js_literal(FAILED_LABEL)};
  }}
  clearTimeout(resetTimer);
  resetTimer = setTimeout(() => {{
    button.textContent = {_js_literal(COPY_LABEL)};
  }}, {feedback_ms});
}};
</script>
"""
