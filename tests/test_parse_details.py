import logging

import pytest

from library_scraper.markdown import ReadmeConverter
from library_scraper.parse import parse_details


class BrokenConverter(ReadmeConverter):
    def convert(self, html):
        raise RuntimeError("converter exploded")


class TestDetailsFixture:
    @pytest.fixture
    def details(self, load_fixture):
        return parse_details(load_fixture("details.html"), "qwen3")

    def test_header_fields(self, details):
        assert details.name == "qwen3"
        assert details.description.startswith("Qwen3 is the latest generation")
        assert details.description.endswith("(MoE) models.")
        assert details.downloads == "4.2M"
        assert details.last_updated == "2 weeks ago"

    def test_variants(self, details):
        assert [v.name for v in details.models] == ["latest", "0.6b", "235b"]
        latest, small, large = details.models
        assert latest.size == "5.2GB"
        assert latest.context_window == "40K"
        assert latest.input_type == "Text"
        assert latest.last_updated == "2 weeks ago"
        assert small.size == "523MB"
        assert large.size == "142GB"
        assert large.last_updated == "3 weeks ago"

    def test_duplicate_variant_keeps_first(self, details):
        latest = details.models[0]
        assert latest.size == "5.2GB"
        assert latest.input_type == "Text"

    def test_readme(self, details):
        assert details.readme_html is not None
        assert details.readme_html.startswith("<h2>Qwen3</h2>")
        md = details.readme_markdown
        assert md is not None
        assert md.startswith("## Qwen3")
        assert "**Qwen**" in md
        assert '![benchmark](https://ollama.com/assets/library/qwen3/benchmark.png "Qwen3 benchmarks")' in md
        assert "- Dense models" in md
        assert "```\nollama run qwen3\n```" in md
        assert "[the Qwen blog](https://qwenlm.github.io/blog/qwen3/)" in md

    def test_readme_images_follow_base_url(self, load_fixture):
        details = parse_details(load_fixture("details.html"), "qwen3", base_url="http://localhost:8080")
        assert "](http://localhost:8080/assets/library/qwen3/benchmark.png" in details.readme_markdown

    def test_camel_case_dump(self, details):
        data = details.model_dump(by_alias=True)
        assert data["lastUpdated"] == "2 weeks ago"
        assert "readmeHtml" in data and "readmeMarkdown" in data
        assert data["models"][0]["contextWindow"] == "40K"
        assert data["models"][0]["inputType"] == "Text"


class TestDetailsEdgeCases:
    def test_minimal_page(self):
        details = parse_details("<html><body><main>minimal-model\nBasic description</main></body></html>", "minimal-model")
        assert details.name == "minimal-model"
        assert details.description == ""
        assert details.downloads == "0"
        assert details.last_updated == ""
        assert details.models == ()
        assert details.readme_html is None
        assert details.readme_markdown is None

    def test_no_readme_container_still_finds_variants(self):
        html = """
        <html><body><main>
          <span id="summary-content">  A small model.  </span>
          <ul>
            <li><a href="/library/tiny:1b">tiny:1b</a> 1.3GB · 128K context window · Text, Vision · 5 days ago</li>
          </ul>
        </main></body></html>
        """
        details = parse_details(html, "tiny")
        assert details.description == "A small model."
        assert details.readme_html is None
        assert details.readme_markdown is None
        [variant] = details.models
        assert variant.name == "1b"
        assert variant.size == "1.3GB"
        assert variant.context_window == "128K"
        assert variant.input_type == "Vision"
        assert variant.last_updated == "5 days ago"

    def test_variant_without_row_uses_parent(self):
        html = '<html><body><p><a href="/library/m:q4">q4</a> 2.1 GB</p></body></html>'
        [variant] = parse_details(html, "m").models
        assert variant.size == "2.1GB"
        assert variant.context_window is None
        assert variant.input_type is None
        assert variant.last_updated == ""

    def test_time_element_wins(self):
        html = """
        <html><body><main>
          <span>Updated <time datetime="2025-05-01">3 months ago</time></span>
          <p>Updated long ago</p>
        </main></body></html>
        """
        assert parse_details(html, "m").last_updated == "3 months ago"

    def test_empty_time_element_falls_back(self):
        html = """
        <html><body><main>
          <time></time>
          <p>Updated 4 days ago</p>
        </main></body></html>
        """
        assert parse_details(html, "m").last_updated == "4 days ago"

    def test_empty_readme_container(self):
        details = parse_details('<html><body><div id="display">   </div></body></html>', "m")
        assert details.readme_html is None
        assert details.readme_markdown is None

    def test_readme_without_text_has_no_markdown(self):
        details = parse_details('<html><body><div id="display"><br></div></body></html>', "m")
        assert details.readme_html == "<br/>"
        assert details.readme_markdown is None

    def test_complex_readme(self):
        html = """
        <html><body><main>
          <div id="display">
            <h1>Complex README</h1>
            <p>This is a <strong>complex</strong> readme with:</p>
            <ul>
              <li>Lists</li>
              <li>Code: <code>print("hello")</code></li>
            </ul>
            <pre><code>def example():
    return "complex"</code></pre>
            <table>
              <tr><th>Col 1</th><th>Col 2</th></tr>
              <tr><td>Val 1</td><td>Val 2</td></tr>
            </table>
            <img src="/image.png" alt="Test image" title="Image title">
            <img src="https://example.com/abs.png" alt="abs">
            <a href="https://example.com">External link</a>
          </div>
        </main></body></html>
        """
        md = parse_details(html, "test-model").readme_markdown
        assert "# Complex README" in md
        assert "**complex**" in md
        assert '`print("hello")`' in md
        assert "```\ndef example():" in md
        assert "| Col 1 | Col 2 |" in md
        assert '![Test image](https://ollama.com/image.png "Image title")' in md
        assert "![abs](https://example.com/abs.png)" in md
        assert "[External link](https://example.com)" in md

    def test_conversion_failure_keeps_html(self, load_fixture, caplog):
        with caplog.at_level(logging.WARNING, logger="library_scraper.parse"):
            details = parse_details(load_fixture("details.html"), "qwen3", converter=BrokenConverter())
        assert details.readme_html is not None
        assert details.readme_markdown is None
        assert "Failed to convert readme to markdown" in caplog.text
        assert "converter exploded" in caplog.text
