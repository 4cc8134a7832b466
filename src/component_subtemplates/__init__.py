"""Component sub-templates: split a component's markup into sibling files.

Each template file in a directory next to a component's module becomes a
``call_<name>`` method on the component class, with the keyword arguments
declared at the top of the file:

    ```
    table_component.py
    table_component/
        header.html.mako    <%# locals: (columns:) -%><tr><th>${columns[0]}</th></tr>
        row.html.mako       <%# locals: (item:, index:) -%><tr><td>${item["name"]}</td></tr>
    ```

    >>> from markupsafe import Markup
    >>> from component_subtemplates import Component
    >>> class TableComponent(Component):
    ...     def __init__(self, items, columns):
    ...         self.items = items
    ...         self.columns = columns
    ...     def call(self):
    ...         rows = [self.call_row(item=item, index=i) for i, item in enumerate(self.items)]
    ...         return Markup("<table>{}{}</table>").format(
    ...             self.call_header(columns=self.columns), Markup("").join(rows)
    ...         )
    >>> TableComponent(items=[{"name": "A"}], columns=["Name"]).render()
    Markup('<table><tr><th>Name</th></tr><tr><td>A</td></tr></table>')

Architecture:
Compile event → Lifecycle → Discovery → SubTemplate → Binder → call_<name>

Pipeline stages:
1. **Discovery**: Lists ``<dir>/<snake_name>/*`` with a registered extension
2. **Parameters**: Reads the ``<%# locals: (...) -%>`` declaration
3. **Translator**: Compiles the source with Mako
4. **Binder**: Defines ``_render_sub_template_<name>`` and ``call_<name>``
5. **Lifecycle**: Does the above once per class, ancestors included

Thread-Safety:
Compilation and sub-template processing run at most once per class, guarded
by a per-class lock. Rendering uses only local state.

"""

from component_subtemplates.binder import bind, call_method_name, render_method_name
from component_subtemplates.component import (
    Compiler,
    Component,
    register_after_compile,
    unregister_after_compile,
)
from component_subtemplates.config import DEFAULT_CONFIG, TemplateConfig
from component_subtemplates.discovery import (
    component_subdir_for,
    discover,
    extension_of,
    sub_template_path_for,
    template_name_for,
    underscore,
)
from component_subtemplates.entity import SubTemplate
from component_subtemplates.exceptions import (
    DuplicateParameterError,
    ErrorCode,
    InvalidParameterError,
    MissingTemplateError,
    SubtemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from component_subtemplates.lifecycle import (
    component_ancestors,
    is_processed,
    on_type_compiled,
)
from component_subtemplates.parameters import extract_parameters
from component_subtemplates.registry import TEMPLATE_EXTENSIONS, ExtensionRegistry
from component_subtemplates.translator import RenderProcedure, translate

register_after_compile(on_type_compiled)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "TEMPLATE_EXTENSIONS",
    "Compiler",
    "Component",
    "DuplicateParameterError",
    "ErrorCode",
    "ExtensionRegistry",
    "InvalidParameterError",
    "MissingTemplateError",
    "RenderProcedure",
    "SubTemplate",
    "SubtemplateError",
    "TemplateConfig",
    "TemplateNotFoundError",
    "TemplateSyntaxError",
    "bind",
    "call_method_name",
    "component_ancestors",
    "component_subdir_for",
    "discover",
    "extension_of",
    "extract_parameters",
    "is_processed",
    "on_type_compiled",
    "register_after_compile",
    "render_method_name",
    "sub_template_path_for",
    "template_name_for",
    "translate",
    "underscore",
    "unregister_after_compile",
]
