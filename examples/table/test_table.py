"""Tests for the table example."""


class TestTableApp:
    """Verify sub-templates render inside a component end-to-end."""

    def test_page_title(self, example_app) -> None:
        assert "<h1>Dependencies</h1>" in example_app.output

    def test_header_rendered(self, example_app) -> None:
        assert "<th>Name</th>" in example_app.output
        assert "<th>Role</th>" in example_app.output

    def test_rows_rendered(self, example_app) -> None:
        assert example_app.output.count("<tr class=") == 2
        assert '<tr class="even">' in example_app.output
        assert '<tr class="odd">' in example_app.output

    def test_values_escaped_once(self, example_app) -> None:
        assert "Escaping &lt;&amp; friends&gt;" in example_app.output
        assert "&lt;table&gt;" not in example_app.output

    def test_entry_points_defined(self, example_app) -> None:
        table = example_app.TableComponent
        assert hasattr(table, "call_header")
        assert hasattr(table, "call_row")
        assert not hasattr(example_app.PageComponent, "call_row")
