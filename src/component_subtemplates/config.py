"""Template configuration shared by main templates and sub-templates.

Configuration is attached to component classes through the
``template_config`` class attribute and is inherited like any other class
attribute:

    >>> class Plain(Component):
    ...     template_config = TemplateConfig(autoescape=False)

"""

from __future__ import annotations

from dataclasses import dataclass

# MarkupSafe escape, imported into every compiled template
ESCAPE_FILTER = "markup_escape"
ESCAPE_IMPORT = f"from markupsafe import escape as {ESCAPE_FILTER}"


@dataclass(frozen=True, slots=True)
class TemplateConfig:
    """Options passed to the template compiler.

    Attributes:
        autoescape: HTML-escape ``${...}`` output. ``Markup`` values (including
            the result of other ``call_*`` entry points) are left untouched.
        strict_undefined: Raise ``NameError`` when a template references a
            name that was neither declared nor passed, instead of rendering
            Mako's ``UNDEFINED``.
        encoding: Encoding used to read template files.
        context_name: Name under which the component instance is exposed to
            its templates.
    """

    autoescape: bool = True
    strict_undefined: bool = True
    encoding: str = "utf-8"
    context_name: str = "component"

    @property
    def default_filters(self) -> list[str] | None:
        # None keeps Mako's own default (``str``)
        return [ESCAPE_FILTER] if self.autoescape else None

    @property
    def imports(self) -> list[str] | None:
        return [ESCAPE_IMPORT] if self.autoescape else None


DEFAULT_CONFIG = TemplateConfig()
