"""Binding sub-templates to component classes.

For a sub-template ``row`` declaring ``<%# locals: (item:, index:) -%>`` the
binder defines two methods on the owning class:

    ```python
    def _render_sub_template_row(self, *, item, index):
        return <RenderProcedure>.render(self, {"item": item, "index": index})

    def call_row(self, *, item, index):
        return self._render_sub_template_row(item=item, index=index)
    ```

Both take exactly the declared names as required keyword-only arguments,
so a missing or unknown argument is rejected by Python itself with the
usual ``TypeError``. Sub-templates without a declaration get methods that
take no arguments.

The methods are generated from source text and ``exec``'d, the way
``dataclasses`` builds ``__init__``.
"""

from __future__ import annotations

import keyword
import logging
from collections import Counter
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from component_subtemplates.config import DEFAULT_CONFIG
from component_subtemplates.exceptions import (
    DuplicateParameterError,
    InvalidParameterError,
    TemplateNotFoundError,
)
from component_subtemplates.translator import RenderProcedure, translate

if TYPE_CHECKING:
    from component_subtemplates.entity import SubTemplate

logger = logging.getLogger(__name__)

_PROCEDURE = "__sub_template_procedure__"

# Names Mako injects into every render context, plus the generated code's own
RESERVED_NAMES = frozenset({"context", "loop", "UNDEFINED", "STOP_RENDERING", _PROCEDURE})


def render_method_name(template_name: str) -> str:
    return f"_render_sub_template_{template_name}"


def call_method_name(template_name: str) -> str:
    return f"call_{template_name}"


def bind(sub_template: SubTemplate) -> None:
    """Define the render routine and ``call_<name>`` entry point.

    Redefining an existing entry point (for example after a forced
    recompile) silently replaces it.

    Raises:
        TemplateNotFoundError: The sub-template file does not exist.
        DuplicateParameterError: A parameter is declared twice.
        InvalidParameterError: A parameter cannot be a keyword argument, or
            the template name cannot be part of a method name.
        TemplateSyntaxError: The template source does not compile.
    """
    path = sub_template.path
    if not path.exists():
        raise TemplateNotFoundError(f"Template file not found: {path}", path=path)
    if not call_method_name(sub_template.template_name).isidentifier():
        raise InvalidParameterError(
            f"Sub-template name {sub_template.template_name!r} cannot be used in a method name",
            filename=str(path),
        )

    parameters = sub_template.declared_parameters
    component = sub_template.component
    config = getattr(component, "template_config", DEFAULT_CONFIG)
    _validate_parameters(parameters, sub_template, context_name=config.context_name)

    procedure = translate(sub_template.source, str(path), config=config)

    render_name = render_method_name(sub_template.template_name)
    call_name = call_method_name(sub_template.template_name)
    _define(
        component,
        render_name,
        _build_render_method(procedure, parameters),
        doc=f"Render {path} (internal).",
    )
    _define(
        component,
        call_name,
        _build_call_method(render_name, parameters),
        doc=f"Render sub-template {sub_template.template_name!r} from {path}.",
    )
    logger.debug(
        "Bound %s.%s(%s) from %s",
        component.__qualname__,
        call_name,
        ", ".join(parameters),
        path,
    )


def _validate_parameters(
    parameters: Sequence[str],
    sub_template: SubTemplate,
    *,
    context_name: str,
) -> None:
    duplicates = [name for name, count in Counter(parameters).items() if count > 1]
    if duplicates:
        raise DuplicateParameterError(
            f"Duplicate parameter {duplicates[0]!r} in locals declaration",
            lineno=_declaration_line(sub_template.source),
            filename=str(sub_template.path),
            source=sub_template.source,
        )
    for name in parameters:
        if not name.isidentifier() or keyword.iskeyword(name) or name == "self":
            reason = "is not a valid keyword argument name"
        elif name in RESERVED_NAMES:
            reason = "is reserved by the template runtime"
        elif name == context_name:
            reason = "is the name the component is exposed under"
        else:
            continue
        raise InvalidParameterError(
            f"Parameter {name!r} {reason}",
            lineno=_declaration_line(sub_template.source),
            filename=str(sub_template.path),
            source=sub_template.source,
        )


def _declaration_line(source: str) -> int | None:
    for lineno, line in enumerate(source.splitlines(), 1):
        if "locals:" in line:
            return lineno
    return None


def _build_render_method(procedure: RenderProcedure, parameters: Sequence[str]) -> Callable:
    arguments = "{" + ", ".join(f"{name!r}: {name}" for name in parameters) + "}"
    body = f"return {_PROCEDURE}.render(self, {arguments})"
    return _create_fn(parameters, body, {_PROCEDURE: procedure})


def _build_call_method(render_name: str, parameters: Sequence[str]) -> Callable:
    forwarded = ", ".join(f"{name}={name}" for name in parameters)
    body = f"return self.{render_name}({forwarded})"
    return _create_fn(parameters, body, {})


def _create_fn(parameters: Sequence[str], body: str, namespace: dict[str, Any]) -> Callable:
    signature = "self, *, " + ", ".join(parameters) if parameters else "self"
    text = f"def __sub_template_fn__({signature}):\n    {body}\n"
    exec(text, namespace)
    return namespace["__sub_template_fn__"]


def _define(component: type, name: str, fn: Callable, *, doc: str) -> None:
    fn.__name__ = name
    fn.__qualname__ = f"{component.__qualname__}.{name}"
    fn.__module__ = component.__module__
    fn.__doc__ = doc
    setattr(component, name, fn)
