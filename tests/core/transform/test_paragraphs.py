from ganymede_toolkit.core.models import Element, Text
from ganymede_toolkit.core.nodes import Dropped, LineBreak, PlainPassthrough
from ganymede_toolkit.core.transform import transform
from ganymede_toolkit.core.transform.paragraphs import count_empty_run, is_empty_paragraph


def _root(*children):
    root = Element("#root")
    for child in children:
        root.append(child)
    return root


def test_is_empty_paragraph():
    assert is_empty_paragraph(Element("p"))
    assert not is_empty_paragraph(Element("div"))
    p = Element("p")
    p.append(Text(""))
    assert not is_empty_paragraph(p)
    assert not is_empty_paragraph(None)


def test_count_walks_forward_only():
    root = _root(Element("p"), Element("p"), Element("p"))
    first, second, third = root.children
    assert count_empty_run(first) == 3
    assert count_empty_run(second) == 2
    assert count_empty_run(third) == 1


def test_text_sibling_breaks_the_run():
    root = _root(Element("p"), Text("\n"), Element("p"))
    assert count_empty_run(root.children[0]) == 1


class TestEmptyParagraphRuns:
    """N consecutive empty paragraphs render a single line break."""

    def test_single(self, render):
        nodes = render("<p></p>")
        assert [type(n) for n in nodes] == [LineBreak]

    def test_run_of_three(self, render):
        nodes = render("<p></p><p></p><p></p>")
        assert [type(n) for n in nodes] == [Dropped, Dropped, LineBreak]

    def test_runs_separated_by_content(self, render):
        nodes = render("<p></p><p></p><p>text</p><p></p>")
        assert [type(n) for n in nodes] == [Dropped, LineBreak, PlainPassthrough, LineBreak]

    def test_whitespace_text_between_paragraphs(self, make_ctx):
        tree = transform(_root(Element("p"), Text("\n"), Element("p")), make_ctx())
        assert [type(n) for n in tree.children] == [LineBreak, PlainPassthrough, LineBreak]
