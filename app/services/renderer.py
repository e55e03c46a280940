"""
Renderer: restricted markdown to HTML for chat bubbles.

Supported: **bold**, *italic*, line breaks and ``` fenced code ```.
On top of that, one archive reference (written by the packager) or one
single-file block becomes a download link.

Raw text is always escaped first, so the only markup in the output is
markup produced here.
"""

from __future__ import annotations

import base64
import html
import re

_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
_ESCAPE_RE = re.compile(r"[&<>\"']")

_CODE_FENCE_RE = re.compile(r"```([\s\S]*?)```")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")

# Tags are matched after newlines became <br>.
_ZIP_TAG_RE = re.compile(r"---ZIP_RESPONSE:([\w.-]+)---<br>([\s\S]*?)<br>---END_ZIP---")
_FILE_TAG_RE = re.compile(r"---FILE:([\w.-]+)---<br>([\s\S]*?)<br>---END FILE---")


class RenderInputError(TypeError):
    """Raised when render() is given something other than a string."""


def escape_html(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text)


def _code_block(match: re.Match) -> str:
    code = match.group(1)
    if code.startswith("<br>"):
        code = code[len("<br>"):]
    return f'<div class="code-container"><pre><code class="copyable-code">{code}</code></pre></div>'


def _zip_button(match: re.Match) -> str:
    name = match.group(1)
    payload = match.group(2).replace("<br>", "")
    return (
        f'<a href="data:application/zip;base64,{payload}" download="{name}" '
        f'class="download-btn zip-download-btn">💾 Download {name}</a>'
    )


def _file_button(match: re.Match) -> str:
    name = match.group(1)
    # Back to the original characters, then base64 so nothing can break out
    # of the href attribute.
    content = html.unescape(match.group(2).replace("<br>", "\n"))
    payload = base64.b64encode(content.encode("utf-8")).decode("ascii")
    return (
        f'<a href="data:text/plain;charset=utf-8;base64,{payload}" download="{name}" '
        f'class="download-btn file-download-btn">⬇️ Download {name}</a>'
    )


def render(raw_text: str) -> str:
    """
    Convert a chat message into display HTML.

    Only the first archive reference is turned into a link; a single-file
    link is produced only when there is no archive reference. Any further
    or malformed tags stay visible as escaped text.
    """
    if not isinstance(raw_text, str):
        raise RenderInputError(f"render() expects str, got {type(raw_text).__name__}")

    out = escape_html(raw_text)
    out = out.replace("\n", "<br>")
    out = _CODE_FENCE_RE.sub(_code_block, out)
    out = _BOLD_RE.sub(r"<strong>\1</strong>", out)
    out = _ITALIC_RE.sub(r"<em>\1</em>", out)

    zip_match = _ZIP_TAG_RE.search(out)
    if zip_match:
        return out.replace(zip_match.group(0), _zip_button(zip_match), 1)

    file_match = _FILE_TAG_RE.search(out)
    if file_match:
        out = out.replace(file_match.group(0), _file_button(file_match), 1)
    return out
