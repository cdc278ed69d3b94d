import pytest

from docrender.core.functions import parse_fragment
from docrender.core.processor import (
    NodeKind,
    RenderNode,
    TreeWalker,
    TreeWalkerConfig,
    WalkContext,
    iter_nodes,
    parse_html_to_nodes,
)
from docrender.core.processor.block_handlers import handle_code


def kinds(nodes):
    return [node.kind for node in nodes]


def test_basic_blocks_in_document_order():
    html = '<h2 id="intro">Intro</h2><p>Hello <strong>there</strong></p><hr><blockquote>q</blockquote>'
    nodes = parse_html_to_nodes(html)

    assert kinds(nodes) == [
        NodeKind.HEADING,
        NodeKind.PARAGRAPH,
        NodeKind.HORIZONTAL_RULE,
        NodeKind.BLOCKQUOTE,
    ]
    assert nodes[0].attrs == {"id": "intro"}
    assert nodes[0].data == {"level": 2}
    assert nodes[1].html == "Hello <strong>there</strong>"
    assert [node.key for node in nodes] == ["0", "1", "2", "3"]


def test_whitespace_only_text_is_skipped_but_keeps_positions():
    nodes = parse_html_to_nodes("<p>a</p>\n  \n<p>b</p>")

    assert kinds(nodes) == [NodeKind.PARAGRAPH, NodeKind.PARAGRAPH]
    assert [node.key for node in nodes] == ["0", "2"]


def test_comments_are_ignored():
    nodes = parse_html_to_nodes("<!-- note --><p>x</p>")
    assert [(node.kind, node.key) for node in nodes] == [(NodeKind.PARAGRAPH, "1")]


def test_unknown_elements_fall_through_to_children():
    """Content inside unhandled containers is never dropped."""
    nodes = parse_html_to_nodes('<section><h3>T</h3><span>loose <em>text</em></span></section>')

    assert kinds(nodes) == [NodeKind.HEADING, NodeKind.TEXT, NodeKind.INLINE]
    assert [node.key for node in nodes] == ["0-0", "0-1-0", "0-1-1"]
    assert nodes[1].text == "loose "
    assert nodes[2].tag == "em"


def test_ui_component_directive():
    nodes = parse_html_to_nodes("<p>See [uic:color-picker] here</p><p>[uic:Bad]</p>")

    assert nodes[0].kind is NodeKind.UI_COMPONENT
    assert nodes[0].data == {"component_id": "color-picker"}
    assert nodes[1].kind is NodeKind.PARAGRAPH


def test_accordion_collects_until_closing_marker():
    html = (
        "<p>:::accordion Details</p>"
        "<p>Inside</p><ul><li>one</li></ul>"
        "<p>:::accordion</p>"
        "<p>After</p>"
    )
    nodes = parse_html_to_nodes(html)

    assert kinds(nodes) == [NodeKind.ACCORDION, NodeKind.PARAGRAPH]
    accordion, after = nodes
    assert accordion.text == "Details"
    assert accordion.data == {"title": "Details"}
    assert kinds(accordion.children) == [NodeKind.PARAGRAPH, NodeKind.LIST]
    assert [child.key for child in accordion.children] == ["0-0", "0-1"]
    assert after.html == "After" and after.key == "4"


def test_accordion_ends_at_next_opener():
    html = "<p>:::accordion One</p><p>a</p><p>:::accordion Two</p><p>b</p>"
    nodes = parse_html_to_nodes(html)

    assert [node.text for node in nodes] == ["One", "Two"]
    assert [node.key for node in nodes] == ["0", "2"]
    assert nodes[1].children[0].html == "b"


def test_unclosed_accordion_runs_to_end():
    nodes = parse_html_to_nodes("<p>:::accordion FAQ</p><p>q</p><p>a</p>")

    assert len(nodes) == 1
    assert len(nodes[0].children) == 2


def test_alert_marker_walks_its_children():
    html = '<div class="custom-alert" data-alert-type="Warning"><p>Careful</p></div>'
    (alert,) = parse_html_to_nodes(html)

    assert alert.kind is NodeKind.ALERT
    assert alert.data == {"kind": "warning"}
    assert alert.children[0].kind is NodeKind.PARAGRAPH
    assert alert.children[0].key == "0-0"


def test_unknown_alert_kind_renders_children(caplog):
    html = '<div class="custom-alert" data-alert-type="danger"><p>x</p></div>'
    with caplog.at_level("WARNING", logger="document-renderer"):
        nodes = parse_html_to_nodes(html)

    assert kinds(nodes) == [NodeKind.PARAGRAPH]
    assert "danger" in caplog.text


def test_math_markers():
    html = (
        '<div class="custom-math" data-formula="E=mc^2"></div>'
        '<span class="custom-math" data-formula="x"></span>'
    )
    block, inline = parse_html_to_nodes(html)

    assert block.kind is NodeKind.MATH
    assert block.data == {"formula": "E=mc^2", "display": True}
    assert inline.data == {"formula": "x", "display": False}


def test_diagram_marker():
    (node,) = parse_html_to_nodes('<div class="custom-diagram" data-diagram="graph TD; A--&gt;B"></div>')

    assert node.kind is NodeKind.DIAGRAM
    assert node.data == {"source": "graph TD; A-->B", "language": "mermaid"}


@pytest.mark.parametrize(
    "html, language",
    [
        ('<pre><code class="language-python">print(1)\n</code></pre>', "python"),
        ("<pre><code>ls -la</code></pre>", "bash"),
        ('<pre data-lang="sql"><code class="language-python">x</code></pre>', "sql"),
    ],
)
def test_code_block_language(html, language):
    (node,) = parse_html_to_nodes(html)

    assert node.kind is NodeKind.CODE_BLOCK
    assert node.data == {"language": language}


def test_code_block_text_is_trimmed():
    (node,) = parse_html_to_nodes('<pre><code class="language-python">\nprint(1)\n</code></pre>')
    assert node.text == "print(1)"


def test_default_code_language_is_configurable():
    walker = TreeWalker(TreeWalkerConfig(default_code_language="text"))
    (node,) = walker.walk("<pre><code>x</code></pre>")
    assert node.data["language"] == "text"


def test_fenced_mermaid_and_math_are_redirected():
    html = (
        '<pre><code class="language-mermaid">graph LR</code></pre>'
        '<pre><code class="language-latex">a^2</code></pre>'
    )
    diagram, math = parse_html_to_nodes(html)

    assert diagram.kind is NodeKind.DIAGRAM
    assert diagram.data["source"] == "graph LR"
    assert math.kind is NodeKind.MATH
    assert math.data == {"formula": "a^2", "display": True}


def test_inline_code():
    (node,) = parse_html_to_nodes("<code>npm i</code>")
    assert node.kind is NodeKind.INLINE_CODE
    assert node.text == "npm i"


def test_code_inside_pre_is_owned_by_the_block():
    soup = parse_fragment("<pre><code>x</code></pre>")
    context = WalkContext(walk=lambda siblings, key: [])

    assert handle_code(soup.find("code"), "0-0", context) == []


def test_task_lists():
    html = (
        '<ul><li><input type="checkbox" checked> done</li>'
        "<li>[ ] todo</li><li>plain</li></ul>"
    )
    (node,) = parse_html_to_nodes(html)
    items = node.data["items"]

    assert node.data["ordered"] is False
    assert node.data["task_list"] is True
    assert [(item["task"], item["checked"]) for item in items] == [
        (True, True),
        (True, False),
        (False, False),
    ]


def test_ordered_list_start():
    (node,) = parse_html_to_nodes('<ol start="3"><li>c</li></ol>')

    assert node.data["ordered"] is True
    assert node.data["start"] == 3
    assert "task_list" not in node.data


def test_links_open_in_new_tab():
    (node,) = parse_html_to_nodes('<a title="Docs">docs</a>')

    assert node.attrs == {
        "href": "#",
        "target": "_blank",
        "rel": "noopener noreferrer",
        "title": "Docs",
    }


def test_images_and_figures():
    image, figure = parse_html_to_nodes('<img src="a.png"><img src="b.png" alt="B" title="Caption">')

    assert image.kind is NodeKind.IMAGE
    assert image.attrs == {"src": "a.png", "alt": "Image", "loading": "lazy"}
    assert figure.kind is NodeKind.FIGURE
    assert figure.text == "Caption"
    assert figure.attrs["alt"] == "B"


def test_table_node_carries_markup_and_parsed_table(team_table_html):
    (node,) = parse_html_to_nodes(team_table_html)

    assert node.kind is NodeKind.TABLE
    assert node.data["table"].header_texts == ("Name", "Role")
    assert len(node.data["table"].rows) == 3
    assert node.html.startswith("<table>")


def test_walk_is_deterministic(team_table_html):
    html = "<h1>T</h1><p>:::accordion A</p><p>x</p>" + team_table_html

    first = [node.to_dict() for node in parse_html_to_nodes(html)]
    second = [node.to_dict() for node in parse_html_to_nodes(html)]
    assert first == second


def test_iter_nodes_is_lazy():
    nodes = iter_nodes("<p>a</p><p>b</p>")

    assert next(nodes).html == "a"
    assert next(nodes).html == "b"
    assert next(nodes, None) is None


def test_iter_tree_visits_nested_nodes():
    html = '<div class="custom-alert" data-alert-type="note"><p>:::accordion T</p><p>x</p></div>'
    (alert,) = parse_html_to_nodes(html)

    assert [node.key for node in alert.iter_tree()] == ["0", "0-0", "0-0-0"]


def test_custom_handler_overrides_default():
    def handle_hr(element, key, context):
        return [RenderNode(NodeKind.TEXT, key, text="---")]

    walker = TreeWalker(TreeWalkerConfig(handlers={"hr": handle_hr}))
    (node,) = walker.walk("<hr>")
    assert node.text == "---"


def test_invalid_parser_is_rejected():
    with pytest.raises(ValueError):
        TreeWalkerConfig(parser="nope")


def test_empty_input():
    assert parse_html_to_nodes("") == []
