"""Table component -- sub-templates as call_<name> methods.

The files in ``table_component/`` next to this module become
``TableComponent.call_header`` and ``TableComponent.call_row``. The page
itself is rendered from ``page_component.html.mako``.

Run:
    python app.py
"""

from markupsafe import Markup

from component_subtemplates import Component


class TableComponent(Component):
    def __init__(self, items, columns):
        self.items = items
        self.columns = columns

    def call(self):
        rows = Markup("").join(
            self.call_row(item=item, index=index) for index, item in enumerate(self.items)
        )
        return Markup("<table>\n<thead>{}</thead>\n<tbody>{}</tbody>\n</table>").format(
            self.call_header(columns=self.columns), rows
        )


class PageComponent(Component):
    def __init__(self, title, table):
        self.title = title
        self.table = table


table = TableComponent(
    items=[
        {"name": "Mako", "role": "Template language"},
        {"name": "MarkupSafe", "role": "Escaping <& friends>"},
    ],
    columns=["Name", "Role"],
)

output = PageComponent(title="Dependencies", table=table).render()


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
