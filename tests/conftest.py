"""Pytest configuration and fixtures for sub-template tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from component_subtemplates import TEMPLATE_EXTENSIONS, Component, underscore


@pytest.fixture
def make_component(tmp_path: Path) -> Callable[..., type[Component]]:
    """Build a component class whose module file lives in ``tmp_path``.

    Usage:
        make_component(
            "TableComponent",
            templates={"row.html.mako": "<%# locals: (item:) -%>\\n${item}"},
            main="<table></table>",
        )

    ``templates`` are written to ``tmp_path/<snake_name>/`` and ``main`` to
    ``tmp_path/<snake_name>.html.mako``. Extra keyword arguments become
    class attributes.
    """

    def factory(
        name: str,
        base: type[Component] = Component,
        *,
        templates: dict[str, str] | None = None,
        main: str | None = None,
        **namespace: object,
    ) -> type[Component]:
        snake = underscore(name)
        identifier = tmp_path / f"{snake}.py"
        if templates is not None:
            write_templates(tmp_path / snake, templates)
        if main is not None:
            (tmp_path / f"{snake}.html.mako").write_text(main)
        namespace["identifier"] = classmethod(lambda cls: str(identifier))
        return type(name, (base,), namespace)

    return factory


@pytest.fixture
def erb_extension():
    """Register the ``erb`` extension for the duration of a test."""
    TEMPLATE_EXTENSIONS.register("erb")
    yield
    TEMPLATE_EXTENSIONS.unregister("erb")


def write_templates(directory: Path, templates: dict[str, str]) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for filename, source in templates.items():
        (directory / filename).write_text(source)
