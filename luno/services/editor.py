"""Editor helpers: split/combine HTML and CSS, classify lesson lines, apply review suggestions."""
from typing import Any

LINE_HTML = "html"
LINE_CSS = "css"
LINE_COMMENT = "comment"


def split_html_css(code: str) -> tuple[str, str]:
    """Split a document into (html, css); the <style> tag lines themselves are dropped."""
    html_lines = []
    css_lines = []
    in_style = False
    for line in (code or "").split("\n"):
        if "<style>" in line:
            in_style = True
            continue
        if "</style>" in line:
            in_style = False
            continue
        if in_style:
            css_lines.append(line)
        else:
            html_lines.append(line)
    return "\n".join(html_lines), "\n".join(css_lines)


def combine_html_css(html: str, css: str) -> str:
    """Put css back into html: before </head> if present, else appended."""
    if not (css or "").strip():
        return html
    if "</head>" in html:
        return html.replace("</head>", f"  <style>\n{css}\n  </style>\n</head>", 1)
    return f"{html}\n<style>\n{css}\n</style>"


def classify_lines(code: str) -> list[tuple[str, str]]:
    """Return (content, line_type) for every line of a lesson document."""
    result = []
    in_style = False
    for line in code.split("\n"):
        stripped = line.strip()
        if "<style>" in line:
            in_style = True
            result.append((line, LINE_HTML))
            continue
        if "</style>" in line:
            in_style = False
            result.append((line, LINE_HTML))
            continue
        if stripped.startswith("/*") or stripped.startswith("<!--"):
            result.append((line, LINE_COMMENT))
        elif in_style:
            result.append((line, LINE_CSS))
        else:
            result.append((line, LINE_HTML))
    return result


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def apply_suggestion(code: str, suggestion: dict) -> str:
    """
    Apply one code-review suggestion to code.

    - oldCode found in code: its first occurrence is replaced by newCode.
    - startLine/endLine (or line), 1-based inclusive: those lines become newCode.
    - neither: newCode is appended on a new line.
    """
    new_code = suggestion.get("newCode")
    if new_code is None:
        new_code = suggestion.get("code")
    if new_code is None:
        raise ValueError("Suggestion has no replacement code")

    old_code = suggestion.get("oldCode")
    if old_code and old_code in code:
        return code.replace(old_code, new_code, 1)

    start = _int_or_none(suggestion.get("startLine"))
    if start is None:
        start = _int_or_none(suggestion.get("line"))
    if start is not None:
        end = _int_or_none(suggestion.get("endLine"))
        if end is None:
            end = start
        lines = code.split("\n")
        if start < 1 or end < start or end > len(lines):
            raise ValueError(f"Line range {start}-{end} is outside the code ({len(lines)} lines)")
        lines[start - 1:end] = new_code.split("\n")
        return "\n".join(lines)

    if old_code:
        raise ValueError("Code to replace was not found")
    if not code:
        return new_code
    return code.rstrip("\n") + "\n" + new_code
