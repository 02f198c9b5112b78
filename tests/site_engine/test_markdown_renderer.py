"""Tests for the Markdown rendering pipeline."""

import pytest
from bs4 import BeautifulSoup

from src.common.config import MarkdownSettings
from src.site_engine.content import MarkdownRenderer, excerpt, reading_time
from src.site_engine.content.markdown_renderer import linked_files, relative_file


@pytest.fixture
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer(site_host="erock.io")


def _links(html: str) -> dict:
    soup = BeautifulSoup(html, "html.parser")
    return {a.get_text(): a for a in soup.find_all("a") if "anchor" not in (a.get("class") or [])}


class TestMarkdownRenderer:
    def test_headings_get_ids_and_permalinks(self, renderer):
        result = renderer.render("## Keep the state shape private\n\ntext\n")
        soup = BeautifulSoup(result.html, "html.parser")
        heading = soup.find("h2")
        assert heading["id"] == "keep-the-state-shape-private"
        anchor = heading.find("a", class_="anchor")
        assert anchor["href"] == "#keep-the-state-shape-private"

    def test_toc(self, renderer):
        result = renderer.render("## First\n\n## Second\n")
        assert 'href="#first"' in result.toc
        assert 'href="#second"' in result.toc

    def test_permalinks_can_be_disabled(self):
        renderer = MarkdownRenderer(MarkdownSettings(heading_permalinks=False))
        result = renderer.render("## Heading\n")
        assert 'class="anchor"' not in result.html
        assert 'id="heading"' in result.html

    def test_external_links_open_in_new_tab(self, renderer):
        result = renderer.render("[reselect](https://github.com/reduxjs/reselect)\n")
        link = _links(result.html)["reselect"]
        assert link["target"] == "_blank"
        assert link["rel"] == ["nofollow", "noopener", "noreferrer"]

    def test_site_links_untouched(self, renderer):
        result = renderer.render(
            "[about](https://erock.io/about/) and [primer](../redux-selectors/)\n"
        )
        links = _links(result.html)
        assert links["about"].get("target") is None
        assert links["primer"].get("target") is None
        assert links["primer"].get("rel") is None

    def test_smartypants(self, renderer):
        result = renderer.render('"Never" call an API -- yield instead.\n')
        assert "&ldquo;Never&rdquo;" in result.html
        assert "&ndash;" in result.html

    def test_fenced_code_and_tables(self, renderer):
        body = (
            "```js\nconst a = 1;\n```\n\n"
            "| approach | re-renders |\n|---|---|\n| selectors | rarely |\n"
        )
        result = renderer.render(body)
        assert '<div class="highlight">' in result.html
        assert "<table>" in result.html
        assert "<td>selectors</td>" in result.html

    def test_fenced_code_highlighted(self, renderer):
        result = renderer.render("```js\nconst selectUser = (state) => state.user;\n```\n")
        soup = BeautifulSoup(result.html, "lxml")
        block = soup.select_one("div.highlight pre")
        assert block is not None
        assert block.select_one("span.kd").get_text() == "const"
        assert result.text == "const selectUser = (state) => state.user;"

    def test_stylesheet_uses_code_style(self):
        css = MarkdownRenderer(MarkdownSettings(code_style="dracula")).stylesheet()
        assert ".highlight" in css
        assert "#282a36" in css.lower()

    def test_plain_text_excludes_markup_and_anchors(self, renderer):
        result = renderer.render("## Title\n\nSome **bold** text.\n")
        assert result.text == "Title Some bold text."

    def test_render_is_deterministic(self, renderer):
        body = "## A\n\n[x](https://example.com)\n\n## A\n"
        first = renderer.render(body)
        second = renderer.render(body)
        assert first == second

    def test_reset_between_documents(self, renderer):
        renderer.render("## Intro\n")
        result = renderer.render("## Intro\n")
        # ids are not suffixed with _1 from the previous document
        assert 'id="intro"' in result.html

    def test_linked_files_collected(self, renderer):
        result = renderer.render("![d](./diagram.png)\n\n[slides](files/talk.pdf)\n")
        assert result.linked_files == ["diagram.png", "files/talk.pdf"]


class TestReadingTime:
    def test_minimum_one_minute(self):
        assert reading_time("") == 1
        assert reading_time("just a few words") == 1

    def test_rounds_up(self):
        assert reading_time("word " * 200) == 1
        assert reading_time("word " * 201) == 2
        assert reading_time("word " * 1000) == 5

    def test_words_per_minute(self):
        renderer = MarkdownRenderer(MarkdownSettings(words_per_minute=100))
        assert renderer.reading_time("word " * 250) == 3


class TestExcerpt:
    def test_short_text_unchanged(self):
        assert excerpt("A short post.") == "A short post."

    def test_cuts_on_word_boundary(self):
        text = "alpha beta gamma delta"
        assert excerpt(text, length=13) == "alpha beta…"

    def test_collapses_whitespace(self):
        assert excerpt("a\n\n  b") == "a b"

    def test_length_respected(self):
        text = "word " * 100
        result = excerpt(text, length=140)
        assert len(result) <= 141
        assert result.endswith("…")


class TestLinkedFiles:
    @pytest.mark.parametrize("ref, expected", [
        ("diagram.png", "diagram.png"),
        ("./img/diagram.png", "img/diagram.png"),
        ("img/../diagram.png", "diagram.png"),
        ("photo%20one.jpg", "photo one.jpg"),
        ("diagram.png?v=2#top", "diagram.png"),
        ("../other-post/diagram.png", None),
        ("/static/logo.png", None),
        ("https://example.com/a.png", None),
        ("mailto:e@erock.io", None),
        ("#section", None),
        ("../redux-selectors/", None),
        ("notes.md", None),
    ])
    def test_relative_file(self, ref, expected):
        assert relative_file(ref) == expected

    def test_images_only(self):
        html = '<img src="a.png"><a href="b.zip">b</a>'
        assert linked_files(html, images_only=True) == ["a.png"]

    def test_rendered_images_subset(self):
        result = MarkdownRenderer().render("![d](diagram.png)\n\n[example](example.com)\n")
        assert result.linked_files == ["diagram.png", "example.com"]
        assert result.images == ["diagram.png"]

    def test_deduplicates(self):
        html = '<img src="a.png"><a href="./a.png">a</a><a href="b.zip">b</a>'
        assert linked_files(html) == ["a.png", "b.zip"]
