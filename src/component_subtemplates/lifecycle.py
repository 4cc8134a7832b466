"""Once-per-class sub-template processing.

``on_type_compiled`` is registered as an after-compile hook of the component
host. For each class it discovers the sub-templates and binds their
``call_*`` entry points exactly once, no matter how often or from how many
threads the hook fires.

Inheritance:
    A subclass may compile before its parents do (or its parents may never
    be compiled explicitly). The hook therefore processes every ancestor
    first, most distant first, stopping before ``Component``. Entry points
    are only defined on the class that owns the sub-template directory;
    subclasses see them through normal attribute lookup.

    ```
    Component
    └── CardComponent        card_component/header.html.mako → call_header
        └── FancyCard        fancy_card/badge.html.mako      → call_badge
    FancyCard.compile()  # processes CardComponent, then FancyCard
    ```

Failure:
    An error from discovery or binding propagates and leaves the class
    unprocessed, so a later compile can retry. Entry points bound before the
    error are not removed.
"""

from __future__ import annotations

import logging

from component_subtemplates.component import Component
from component_subtemplates.discovery import discover
from component_subtemplates.utils.type_flags import TypeFlags

logger = logging.getLogger(__name__)

_processed = TypeFlags()


def on_type_compiled(component: type[Component]) -> None:
    """Bind the sub-templates of ``component`` and of its ancestors."""
    if _processed.is_set(component):
        return
    for ancestor in reversed(component_ancestors(component)):
        _processed.run_once(ancestor, _process)
    _processed.run_once(component, _process)


def is_processed(component: type[Component]) -> bool:
    return _processed.is_set(component)


def component_ancestors(component: type[Component]) -> list[type[Component]]:
    """Component subclasses ``component`` inherits from, nearest first.

    ``Component`` itself and classes that are not components (mixins) are
    left out.
    """
    return [
        cls
        for cls in component.__mro__[1:]
        if cls is not Component and isinstance(cls, type) and issubclass(cls, Component)
    ]


def _process(component: type[Component]) -> None:
    sub_templates = discover(component)
    for sub_template in sub_templates:
        sub_template.compile_to_component()
    if sub_templates:
        logger.debug(
            "Processed %d sub-template(s) for %s: %s",
            len(sub_templates),
            component.__qualname__,
            ", ".join(s.template_name for s in sub_templates),
        )
