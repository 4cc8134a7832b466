"""SubTemplate: one sibling template file of a component class."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from component_subtemplates.binder import bind
from component_subtemplates.config import DEFAULT_CONFIG
from component_subtemplates.exceptions import TemplateNotFoundError
from component_subtemplates.parameters import extract_parameters

if TYPE_CHECKING:
    from component_subtemplates.component import Component


class SubTemplate:
    """A single sub-template file associated with a component class.

    Reads its source and extracts its declared parameters lazily, each at
    most once. Instances are built fresh by every discovery pass and are
    inert once ``compile_to_component()`` has run.

    Public API (stable across minor versions):
        component: The component class the entry point is defined on.
        path: Absolute path to the template file.
        template_name: Short name (``header`` for ``header.html.mako``).
        source: Raw template source.
        declared_parameters: Parameter names from the locals declaration.

    Identity:
        Two instances are equal when they refer to the same component class
        and the same path.

    Example:
            >>> sub = SubTemplate(TableComponent, "/app/table_component/row.html.mako", "row")
            >>> sub.declared_parameters
            ('item', 'index')
            >>> sub.compile_to_component()
            >>> TableComponent(items=[], columns=[]).call_row(item={"name": "A"}, index=0)
            Markup('\\n<tr data-index="0"><td>A</td></tr>')

    """

    __slots__ = ("_declared_parameters", "_source", "component", "path", "template_name")

    def __init__(
        self,
        component: type[Component],
        path: str | Path,
        template_name: str,
    ):
        self.component = component
        self.path = Path(path)
        self.template_name = template_name
        self._source: str | None = None
        self._declared_parameters: tuple[str, ...] | None = None

    @property
    def source(self) -> str:
        if self._source is None:
            config = getattr(self.component, "template_config", DEFAULT_CONFIG)
            try:
                self._source = self.path.read_text(config.encoding)
            except FileNotFoundError:
                raise TemplateNotFoundError(
                    f"Template file not found: {self.path}", path=self.path
                ) from None
        return self._source

    @property
    def declared_parameters(self) -> tuple[str, ...]:
        if self._declared_parameters is None:
            self._declared_parameters = extract_parameters(self.source, filename=str(self.path))
        return self._declared_parameters

    def compile_to_component(self) -> None:
        """Define ``call_<template_name>`` on the component class."""
        bind(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubTemplate):
            return NotImplemented
        return self.component is other.component and self.path == other.path

    def __hash__(self) -> int:
        return hash((self.component, self.path))

    def __repr__(self) -> str:
        return (
            f"SubTemplate(component={self.component.__qualname__}, "
            f"template_name={self.template_name!r}, path={str(self.path)!r})"
        )
