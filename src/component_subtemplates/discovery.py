"""Sub-template discovery.

Sub-templates live in a directory next to the file that defines the
component, named after the component class in snake case:

    ```
    components/
    ├── table_component.py          # class TableComponent(Component)
    ├── table_component.html.mako   # main template
    └── table_component/
        ├── header.html.mako        # → TableComponent.call_header
        ├── row.html.mako           # → TableComponent.call_row
        └── README.md               # ignored (not a template extension)
    ```

Only direct children with a registered extension are considered. A file
whose name cannot form a ``call_<name>`` method (``my-row.html.mako``) is
skipped as well.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from component_subtemplates.binder import call_method_name
from component_subtemplates.entity import SubTemplate
from component_subtemplates.registry import TEMPLATE_EXTENSIONS

if TYPE_CHECKING:
    from component_subtemplates.component import Component

logger = logging.getLogger(__name__)

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a CamelCase class name to snake_case.

    Example:
            >>> underscore("TableComponent")
            'table_component'
            >>> underscore("HTMLTableComponent")
            'html_table_component'

    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def template_name_for(filename: str) -> str:
    """Everything before the first dot: ``header.html.mako`` → ``header``."""
    return filename.split(".", 1)[0]


def extension_of(filename: str) -> str:
    """Everything after the last dot, or ``""`` when there is none."""
    _, dot, extension = filename.rpartition(".")
    return extension if dot else ""


def component_subdir_for(component: type[Component]) -> Path:
    """Directory holding the sub-templates of ``component``."""
    return Path(component.identifier()).parent / underscore(component.__name__)


def sub_template_path_for(
    component: type[Component],
    template_name: str,
    extension: str = "html.mako",
) -> Path:
    """Expected path of a named sub-template of ``component``."""
    return component_subdir_for(component) / f"{template_name}.{extension}"


def discover(
    component: type[Component],
    extensions: Iterable[str] | None = None,
) -> list[SubTemplate]:
    """Find the sub-templates of a component class.

    Args:
        component: Component class whose sibling directory is scanned.
        extensions: Recognised template extensions. Defaults to the host
            registry, read at call time.

    Returns:
        One SubTemplate per template file, sorted by file name. Empty when
        the component has no sub-template directory.
    """
    subdir = component_subdir_for(component)
    if not subdir.is_dir():
        return []

    if extensions is None:
        extensions = TEMPLATE_EXTENSIONS.snapshot()
    recognised = frozenset(extensions)

    sub_templates: list[SubTemplate] = []
    for path in sorted(subdir.iterdir(), key=lambda p: p.name):
        if not path.is_file():
            continue
        if extension_of(path.name) not in recognised:
            logger.debug("Skipping %s: not a template extension", path)
            continue
        template_name = template_name_for(path.name)
        if not template_name:
            logger.debug("Skipping %s: empty template name", path)
            continue
        if not call_method_name(template_name).isidentifier():
            logger.debug("Skipping %s: %r is not usable in a method name", path, template_name)
            continue
        sub_templates.append(SubTemplate(component, path.absolute(), template_name))

    logger.debug(
        "Discovered %d sub-template(s) for %s in %s",
        len(sub_templates),
        component.__qualname__,
        subdir,
    )
    return sub_templates
