import pytest

from mdeditor.config import HighlightConfig
from mdeditor.matcher import (
    RULES,
    header_size,
    is_table_separator,
    match_spans,
    rule_blockquotes,
    rule_bold,
    rule_code_blocks,
    rule_headers,
    rule_images,
    rule_inline_code,
    rule_italic,
    rule_links,
    rule_lists,
    rule_strikethrough,
    rule_tables,
)
from mdeditor.spans import LineIndex
from mdeditor.themes import Construct, get_theme


def run(rule, text, config):
    return rule(text, LineIndex(text), config)


def ranges(spans):
    return [(s.start, s.end) for s in spans]


def test_rule_order_is_fixed():
    assert [name for name, _ in RULES] == [
        "base", "headers", "bold", "italic", "strikethrough", "inline_code",
        "code_blocks", "blockquotes", "tables", "images", "links", "lists",
    ]


def test_base_covers_whole_document(config, theme):
    text = "# Title\n\nsome *text*"
    spans = match_spans(text, config)
    base = spans[0]
    assert (base.start, base.end) == (0, len(text))
    assert base.style.foreground == theme.text
    assert base.style.bold is False
    assert base.style.size == 14


def test_empty_document_yields_only_base(config):
    spans = match_spans("", config)
    assert ranges(spans) == [(0, 0)]


def test_pass_is_idempotent(config):
    text = "# H\n**b** *i* ~~s~~ `c`\n> q\n| a |\n|---|\n- x\n![a](b) [l](u)"
    assert match_spans(text, config) == match_spans(text, config)


@pytest.mark.parametrize("level", range(1, 7))
def test_header_levels(level, config, theme):
    text = "#" * level + " Heading"
    spans = run(rule_headers, text, config)
    assert ranges(spans) == [(0, len(text))]
    style = spans[0].style
    assert style.bold is True
    assert style.foreground == theme.headers[level - 1]
    assert style.size == header_size(level, 14)


def test_header_color_clamps_on_short_palette():
    cfg = HighlightConfig(theme=get_theme("high-contrast"))
    spans = run(rule_headers, "###### six", cfg)
    assert spans[0].style.foreground == cfg.theme.headers[-1]


@pytest.mark.parametrize("text", ["####### seven", "#nospace", " # indented", "#"])
def test_not_headers(text, config):
    assert run(rule_headers, text, config) == []


def test_header_font_sizes():
    assert header_size(1, 14) == 16
    assert header_size(2, 14) == 14
    assert header_size(6, 14) == 14


def test_headers_on_several_lines(config):
    text = "# One\nbody\n## Two"
    assert ranges(run(rule_headers, text, config)) == [(0, 5), (11, 17)]


def test_bold_covers_delimiters(config, theme):
    spans = run(rule_bold, "**bold**", config)
    assert ranges(spans) == [(0, 8)]
    assert spans[0].style.bold is True
    assert spans[0].style.foreground == theme.bold.color


def test_bold_is_non_greedy(config):
    assert ranges(run(rule_bold, "**a** and **b**", config)) == [(0, 5), (10, 15)]


LINE_BREAKS = ["\n", "\r", "\r\n", "\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"]


@pytest.mark.parametrize("nl", LINE_BREAKS, ids=repr)
@pytest.mark.parametrize("rule, template", [
    (rule_bold, "**a{nl}b**"),
    (rule_italic, "*a{nl}b*"),
    (rule_strikethrough, "~~a{nl}b~~"),
    (rule_inline_code, "`a{nl}b`"),
    (rule_images, "![a{nl}b](x)"),
    (rule_images, "![a](x{nl}y)"),
    (rule_links, "[a{nl}b](x)"),
    (rule_links, "[a](x{nl}y)"),
])
def test_inline_rules_do_not_span_lines(rule, template, nl, config):
    assert run(rule, template.format(nl=nl), config) == []


def test_italic_covers_delimiters(config, theme):
    spans = run(rule_italic, "*italic*", config)
    assert ranges(spans) == [(0, 8)]
    assert spans[0].style.italic is True
    assert spans[0].style.foreground == theme.italic.color


def test_italic_also_matches_bold_delimiters(config):
    # known quirk: the single-asterisk rule is not delimiter aware
    assert ranges(run(rule_italic, "**bold**", config)) == [(0, 2), (6, 8)]


def test_italic_does_not_span_lines(config):
    assert run(rule_italic, "* one\n* two", config) == []


def test_strikethrough(config, theme):
    spans = run(rule_strikethrough, "keep ~~gone~~", config)
    assert ranges(spans) == [(5, 13)]
    assert spans[0].style.strikethrough is True
    assert spans[0].style.foreground == theme.strikethrough.color


def test_inline_code(config, theme):
    spans = run(rule_inline_code, "call `f()` now", config)
    assert ranges(spans) == [(5, 10)]
    style = spans[0].style
    assert style.monospace is True
    assert style.foreground == theme.code.color
    assert style.background == theme.code.background


@pytest.mark.parametrize("text", ["``", "`a\nb`", "no code"])
def test_inline_code_misses(text, config):
    assert run(rule_inline_code, text, config) == []


def test_fenced_block_covers_both_fences(config, theme):
    text = "```\ncode\n```"
    spans = run(rule_code_blocks, text, config)
    assert ranges(spans) == [(0, len(text))]
    assert spans[0].style.monospace is True
    assert spans[0].style.background == theme.code.background


def test_fenced_block_excludes_trailing_newline(config):
    text = "intro\n```py\nx = 1\n```\nafter"
    assert ranges(run(rule_code_blocks, text, config)) == [(6, 21)]


def test_unterminated_fence_yields_nothing(config):
    assert run(rule_code_blocks, "```\ncode", config) == []


def test_indented_fences_and_second_unterminated_block(config):
    text = "  ```\na\n\t```\n```\nb"
    assert ranges(run(rule_code_blocks, text, config)) == [(0, 12)]


def test_blockquote_body_then_marker(config, theme):
    spans = run(rule_blockquotes, "> quote", config)
    assert ranges(spans) == [(0, 7), (0, 2)]
    body, marker = spans
    assert body.style.foreground == theme.blockquote.color
    assert marker.style.foreground == theme.blockquote_marker.color
    assert marker.style.bold is True


def test_nested_and_indented_blockquotes(config):
    spans = run(rule_blockquotes, ">> nested\n  >x", config)
    assert ranges(spans) == [(0, 9), (0, 3), (10, 14), (10, 13)]


def test_blockquote_does_not_reach_into_next_line(config):
    spans = run(rule_blockquotes, ">\nplain", config)
    assert ranges(spans) == [(0, 1), (0, 1)]


@pytest.mark.parametrize("line", ["| --- | --- |", "|---|:---:|", "---|---", " :-- | --: "])
def test_table_separator_detection(line):
    assert is_table_separator(line)


@pytest.mark.parametrize("line", ["---", "| a | b |", "|", "| -- x |"])
def test_not_table_separators(line):
    assert not is_table_separator(line)


def test_separator_row_is_one_bold_span(config, theme):
    text = "| --- | --- |"
    spans = run(rule_tables, text, config)
    assert ranges(spans) == [(0, 13)]
    assert spans[0].style.bold is True
    assert spans[0].style.foreground == theme.table.color


def test_plain_pipe_row_styles_each_pipe(config, theme):
    spans = run(rule_tables, "| a | b |", config)
    assert ranges(spans) == [(0, 1), (4, 5), (8, 9)]
    assert all(s.style.foreground == theme.table.color for s in spans)


def test_rows_adjacent_to_separator_are_bold(config):
    text = "| a | b |\n| --- | --- |\n| 1 | 2 |\n| 3 | 4 |"
    spans = run(rule_tables, text, config)
    whole_rows = [(s.start, s.end) for s in spans if s.style.foreground is None]
    # header row and, by adjacency, the first body row
    assert whole_rows == [(0, 9), (24, 33)]


def test_image(config, theme):
    spans = run(rule_images, "![alt](img.png)", config)
    assert ranges(spans) == [(0, 15), (0, 1), (2, 5)]
    body, bang, alt = spans
    assert body.style.foreground == theme.image.color
    assert bang.style.foreground == theme.image_marker.color
    assert bang.style.bold is True
    assert alt.style.italic is True
    assert alt.style.foreground is None


def test_image_with_empty_alt(config):
    assert ranges(run(rule_images, "![](x.png)", config)) == [(0, 10), (0, 1)]


def test_link(config, theme):
    spans = run(rule_links, "[text](url)", config)
    assert ranges(spans) == [(0, 11)]
    assert spans[0].style.underline is True
    assert spans[0].style.foreground == theme.link.color


def test_link_rule_also_matches_image_suffix(config):
    # known quirk: link styling lands on top of the image's [alt](url) part
    assert ranges(run(rule_links, "![alt](url)", config)) == [(1, 11)]


@pytest.mark.parametrize("text", ["[](url)", "[a]()", "[a]\n(url)"])
def test_link_misses(text, config):
    assert run(rule_links, text, config) == []


@pytest.mark.parametrize(
    "text, expected",
    [
        ("- item", [(0, 2)]),
        ("* item", [(0, 2)]),
        ("+   item", [(0, 4)]),
        ("  10. item", [(0, 6)]),
        ("a\n\t- b", [(2, 5)]),
    ],
)
def test_list_markers(text, expected, config, theme):
    spans = run(rule_lists, text, config)
    assert ranges(spans) == expected
    assert all(s.style.foreground == theme.list_marker.color for s in spans)


@pytest.mark.parametrize("text", ["-item", "---", "1.item", "text - no"])
def test_not_list_markers(text, config):
    assert run(rule_lists, text, config) == []


def test_crlf_line_endings(config):
    text = "# Title\r\n- item\r> q"
    assert ranges(run(rule_headers, text, config)) == [(0, 7)]
    assert ranges(run(rule_lists, text, config)) == [(9, 11)]
    assert ranges(run(rule_blockquotes, text, config)) == [(16, 19), (16, 18)]


@pytest.mark.parametrize("nl", LINE_BREAKS, ids=repr)
def test_line_rules_end_at_line_breaks(nl, config):
    text = f"# T{nl}> q{nl}- x"
    quote = 3 + len(nl)
    item = quote + 3 + len(nl)
    assert ranges(run(rule_headers, text, config)) == [(0, 3)]
    assert ranges(run(rule_blockquotes, text, config)) == [(quote, quote + 3), (quote, quote + 2)]
    assert ranges(run(rule_lists, text, config)) == [(item, item + 2)]


@pytest.mark.parametrize("nl", LINE_BREAKS, ids=repr)
def test_block_rules_split_on_every_line_break(nl, config):
    fenced = f"```{nl}code{nl}```"
    assert ranges(run(rule_code_blocks, fenced, config)) == [(0, len(fenced))]
    table = f"| a |{nl}|---|"
    sep = 5 + len(nl)
    assert (sep, sep + 5) in ranges(run(rule_tables, table, config))


def test_line_index_uses_unicode_line_breaks():
    lines = LineIndex("a\u2028b\r\nc\x85")
    assert len(lines) == 4
    assert [lines.line(i) for i in range(4)] == ["a", "b", "c", ""]
    assert [lines.start(i) for i in range(4)] == [0, 2, 5, 7]


def test_paragraph_separator_keeps_bold_off_next_line(config):
    spans = match_spans("**a\u2029b**", config)
    assert not any(s.style.bold for s in spans)


@pytest.mark.parametrize("rule, text, construct", [
    (rule_bold, "**b**", Construct.BOLD),
    (rule_italic, "*i*", Construct.ITALIC),
    (rule_strikethrough, "~~s~~", Construct.STRIKETHROUGH),
    (rule_inline_code, "`c`", Construct.CODE),
    (rule_blockquotes, "> q", Construct.BLOCKQUOTE),
    (rule_tables, "|---|", Construct.TABLE),
    (rule_images, "![a](x)", Construct.IMAGE),
    (rule_links, "[a](x)", Construct.LINK),
    (rule_lists, "- x", Construct.LIST_MARKER),
])
def test_rules_paint_from_theme_swatches(rule, text, construct):
    theme = get_theme("dracula")
    swatch = theme.swatch(construct)
    span = run(rule, text, HighlightConfig(theme=theme))[0]
    assert span.style.foreground == swatch.color
    assert span.style.background == swatch.background
