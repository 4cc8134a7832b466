"""Minimal component host.

A ``Component`` subclass renders through ``call()``, which is either
written inline in the class body or compiled from a main template file
sitting next to the module that defines the class:

    ```
    components/
    ├── card_component.py           # class CardComponent(Component)
    └── card_component.html.mako    # becomes CardComponent.call
    ```

Compilation happens once per class, on first ``render()`` or explicitly
through ``Component.compile()``. When a class has finished compiling, the
hooks registered with ``register_after_compile`` run; that is where the
sub-template pipeline plugs in.

Example:
        >>> class Greeting(Component):
        ...     def __init__(self, name):
        ...         self.name = name
        >>> Greeting("World").render()   # greeting.html.mako: Hello, ${component.name}!
        Markup('Hello, World!')

"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import ClassVar

from markupsafe import Markup

from component_subtemplates.config import DEFAULT_CONFIG, TemplateConfig
from component_subtemplates.discovery import extension_of, template_name_for, underscore
from component_subtemplates.exceptions import MissingTemplateError
from component_subtemplates.registry import TEMPLATE_EXTENSIONS
from component_subtemplates.translator import RenderProcedure, translate
from component_subtemplates.utils.type_flags import TypeFlags

logger = logging.getLogger(__name__)

AfterCompileHook = Callable[[type["Component"]], None]

_after_compile_hooks: list[AfterCompileHook] = []
_compiled = TypeFlags()


def register_after_compile(hook: AfterCompileHook) -> AfterCompileHook:
    """Run ``hook(component_class)`` after every component class compiles.

    Registering the same hook twice has no effect. Returns the hook so this
    can be used as a decorator.
    """
    if hook not in _after_compile_hooks:
        _after_compile_hooks.append(hook)
    return hook


def unregister_after_compile(hook: AfterCompileHook) -> None:
    if hook in _after_compile_hooks:
        _after_compile_hooks.remove(hook)


class Component:
    """Base class for renderable components.

    Class Attributes:
        template_config: Options for compiling this class's templates.

    Methods:
        identifier(): File that defines the class; templates are found
            relative to it.
        compile(force=False): Compile the main template and run hooks.
        render(): Compile if needed, then return ``call()``.
    """

    template_config: ClassVar[TemplateConfig] = DEFAULT_CONFIG

    @classmethod
    def identifier(cls) -> str:
        return inspect.getfile(cls)

    @classmethod
    def compile(cls, *, force: bool = False) -> None:
        Compiler(cls).compile(force=force)

    @classmethod
    def compiled(cls) -> bool:
        return _compiled.is_set(cls)

    @classmethod
    def after_compile(cls) -> None:
        for hook in list(_after_compile_hooks):
            hook(cls)

    def call(self) -> Markup:
        raise MissingTemplateError(
            f"{type(self).__qualname__} has no template and does not define call()"
        )

    def render(self) -> Markup:
        type(self).compile()
        return Markup(self.call())

    def __html__(self) -> str:
        return self.render()


class Compiler:
    """Compiles a component class's main template into ``call()``.

    Resolution order:
        1. ``call`` defined in the class body is used as is.
        2. ``<dir>/<snake_name>.<...>.<ext>`` with a registered extension is
           translated and installed as ``call``.
        3. A ``call`` inherited from a parent class is kept; a parent's main
           template is compiled first if needed.
        4. Otherwise ``MissingTemplateError``.

    Thread-Safety:
        At most one compilation per class runs at a time; concurrent callers
        wait for it and then return.
    """

    __slots__ = ("_component",)

    def __init__(self, component: type[Component]):
        self._component = component

    def compile(self, *, force: bool = False) -> None:
        _compiled.run_once(self._component, self._compile, force=force)

    def template_path(self) -> Path | None:
        """Main template file of the component, if any."""
        identifier = Path(self._component.identifier())
        expected = underscore(self._component.__name__)
        directory = identifier.parent
        if not directory.is_dir():
            return None
        for path in sorted(directory.iterdir(), key=lambda p: p.name):
            if (
                path.is_file()
                and template_name_for(path.name) == expected
                and extension_of(path.name) in TEMPLATE_EXTENSIONS
            ):
                return path
        return None

    def _compile(self, component: type[Component]) -> None:
        inline_call = component.__dict__.get("call")
        if inline_call is None or _is_compiled_call(inline_call):
            path = self.template_path()
            if path is not None:
                source = path.read_text(component.template_config.encoding)
                procedure = translate(source, str(path), config=component.template_config)
                component.call = _build_call(component, procedure)
                logger.debug("Compiled %s from %s", component.__qualname__, path)
            else:
                owner = _inherited_template_owner(component)
                if owner is not None:
                    owner.compile()
            if component.call is Component.call:
                raise MissingTemplateError(
                    f"Could not find a template file for {component.__qualname__} "
                    f"next to {component.identifier()} and no call() method is defined"
                )
        component.after_compile()


def _build_call(component: type[Component], procedure: RenderProcedure) -> Callable:
    def call(self: Component) -> Markup:
        return procedure.render(self, {})

    call.__qualname__ = f"{component.__qualname__}.call"
    call.__module__ = component.__module__
    call.__compiled_template__ = procedure.filename  # type: ignore[attr-defined]
    return call


def _inherited_template_owner(component: type[Component]) -> type[Component] | None:
    for base in component.__mro__[1:]:
        if base is Component or not issubclass(base, Component):
            continue
        if Compiler(base).template_path() is not None:
            return base
    return None


def _is_compiled_call(fn: object) -> bool:
    return hasattr(fn, "__compiled_template__")
