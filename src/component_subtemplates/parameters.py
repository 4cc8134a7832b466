"""Declared-parameter extraction for sub-templates.

A sub-template declares the keyword arguments its entry point accepts with a
comment-only pragma on any line of its source:

    ```
    <%# locals: (item:, index:) -%>
    <tr data-index="${index}"><td>${item["name"]}</td></tr>
    ```

This is a content contract, not a parser. Only identifiers are extracted;
whatever follows each ``name:`` marker (defaults, annotations) is ignored.
Validation of the names themselves happens when the sub-template is bound.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# First occurrence only; `.` does not cross newlines.
LOCALS_PRAGMA = re.compile(r"<%#\s*locals:\s*\((.*?)\)\s*-%>")

_PARAMETER_MARKER = re.compile(r"(\w+):")
_PRAGMA_START = re.compile(r"<%#\s*locals:")

# A comment tag may span lines but never contains another tag
_COMMENT_TAG = re.compile(r"<%#(?:(?!<%|%>).)*%>", re.DOTALL)
_UNCLOSED_COMMENT = re.compile(r"<%#[^\n]*")


def extract_parameters(source: str, *, filename: str | None = None) -> tuple[str, ...]:
    """Return declared parameter names in source order.

    Args:
        source: Template source text.
        filename: Only used in the warning logged for malformed declarations.

    Returns:
        Tuple of names, empty when no declaration is present. A declaration
        that starts like a pragma but does not have its full shape is treated
        as absent.

    Example:
            >>> extract_parameters("<%# locals: (a:, b:) -%>\\nX")
            ('a', 'b')
            >>> extract_parameters("<p>no locals</p>")
            ()

    """
    match = LOCALS_PRAGMA.search(source)
    if match is None:
        if _PRAGMA_START.search(source):
            logger.warning(
                "Malformed locals declaration in %s, expected "
                "'<%%# locals: (name:, ...) -%%>'; treating as no parameters",
                filename or "<template>",
            )
        return ()
    return tuple(_PARAMETER_MARKER.findall(match.group(1)))


def strip_declaration(source: str) -> str:
    """Blank out comment tags, keeping line numbers unchanged.

    The template language has no ``<%# ... %>`` form, so every such tag is
    removed before compiling: the locals declaration, a second or malformed
    declaration, and plain notes. Each is replaced by as many newlines as it
    spans so that compiler diagnostics still point at the right line. An
    opening ``<%#`` that is never closed is blanked to the end of its line.
    """
    source = _COMMENT_TAG.sub(_blank, source)
    return _UNCLOSED_COMMENT.sub("", source)


def _blank(match: re.Match[str]) -> str:
    return "\n" * match.group(0).count("\n")
