"""Template source → render procedure.

Expression evaluation belongs to Mako. This module feeds it the right source
(the locals declaration removed) and the file path (for tracebacks and
error messages), and wraps the compiled template in an immutable
``RenderProcedure`` the binder can install on a component class.

Pipeline:
    source ─ strip_declaration ─→ mako.template.Template ─→ RenderProcedure

Nothing is cached here; each sub-template is translated once, when bound.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mako import exceptions as mako_exceptions
from mako.template import Template as MakoTemplate
from markupsafe import Markup

from component_subtemplates.config import DEFAULT_CONFIG, TemplateConfig
from component_subtemplates.exceptions import TemplateSyntaxError
from component_subtemplates.parameters import strip_declaration


@dataclass(frozen=True, slots=True)
class RenderProcedure:
    """Compiled template ready to be called from a component method.

    Attributes:
        template: The compiled Mako template.
        filename: Source path, as shown in tracebacks.
        context_name: Name the component instance is exposed under.

    Thread-Safety:
        Immutable after construction. Mako templates render with local
        state only, so one procedure can serve concurrent renders.
    """

    template: MakoTemplate
    filename: str
    context_name: str = DEFAULT_CONFIG.context_name

    @property
    def code(self) -> str:
        """Python module source generated by Mako (for debugging)."""
        return self.template.code

    def render(self, component: Any, arguments: dict[str, Any]) -> Markup:
        """Render with ``arguments`` plus the component under ``context_name``.

        The result is wrapped in ``Markup`` so that callers embedding it in
        another template do not escape it a second time.
        """
        context = {self.context_name: component, **arguments}
        return Markup(self.template.render(**context))


def translate(
    source: str,
    path: str,
    *,
    config: TemplateConfig = DEFAULT_CONFIG,
) -> RenderProcedure:
    """Compile template source into a RenderProcedure.

    Args:
        source: Full template source, locals declaration included.
        path: File the source came from.
        config: Escaping and undefined-name behaviour.

    Raises:
        TemplateSyntaxError: Mako rejected the source. Line numbers refer to
            the original file.
    """
    text = strip_declaration(source)
    try:
        template = MakoTemplate(
            text=text,
            filename=path,
            strict_undefined=config.strict_undefined,
            default_filters=config.default_filters,
            imports=config.imports,
        )
    except (mako_exceptions.SyntaxException, mako_exceptions.CompileException) as e:
        raise TemplateSyntaxError(
            f"Cannot compile template: {_strip_position(e)}",
            lineno=getattr(e, "lineno", None),
            filename=path,
            source=source,
        ) from e
    return RenderProcedure(template=template, filename=path, context_name=config.context_name)


def _strip_position(error: Exception) -> str:
    # Mako appends "in file '...' at line: N char: M"; we report location ourselves
    message = str(error)
    cut = message.find(" in file ")
    if cut == -1:
        cut = message.find(" at line: ")
    return message[:cut] if cut != -1 else message
