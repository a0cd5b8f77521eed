"""
Unit tests for the command line interface and file helpers.
"""
import functools

import pytest

import translate
from src.utils import file_utils
from src.utils.file_utils import get_unique_output_path, default_output_path


@pytest.fixture
def use_fake_provider(monkeypatch, make_provider):
    """Make the CLI translate with an in-memory provider."""
    options = {}

    def factory(config):
        return make_provider(model=config.model, **options)

    monkeypatch.setattr(
        translate,
        "translate_document_file",
        functools.partial(file_utils.translate_document_file, provider_factory=factory),
    )
    return options


class TestOutputPaths:

    def test_default_output_path(self):
        assert default_output_path("book/ch1.xhtml", "Brazilian Portuguese") == \
            "book/ch1_translated_brazilian_portuguese.xhtml"

    def test_unique_output_path(self, tmp_path):
        target = tmp_path / "page.xhtml"
        assert get_unique_output_path(str(target)) == str(target)

        target.write_text("x")
        assert get_unique_output_path(str(target)) == str(tmp_path / "page (1).xhtml")

        (tmp_path / "page (1).xhtml").write_text("x")
        assert get_unique_output_path(str(target)) == str(tmp_path / "page (2).xhtml")


class TestMain:

    def test_translates_file(self, tmp_path, use_fake_provider):
        source = tmp_path / "page.html"
        source.write_text("<div><h1>Hello</h1><p>World</p></div>", encoding="utf-8")
        output = tmp_path / "out.html"

        exit_code = translate.main(["-i", str(source), "-o", str(output), "-tl", "Turkish", "--no-color"])

        assert exit_code == 0
        assert "<h1>TR:Hello</h1><p>TR:World</p>" in output.read_text(encoding="utf-8")

    def test_default_output_name(self, tmp_path, use_fake_provider):
        source = tmp_path / "page.xhtml"
        source.write_text(
            '<?xml version="1.0" encoding="utf-8"?>'
            '<html xmlns="http://www.w3.org/1999/xhtml"><body><p>Hi</p></body></html>',
            encoding="utf-8"
        )

        assert translate.main(["-i", str(source), "-tl", "French", "--no-color"]) == 0

        output = tmp_path / "page_translated_french.xhtml"
        text = output.read_text(encoding="utf-8")
        assert text.startswith("<?xml")
        assert "<p>TR:Hi</p>" in text

    def test_failure_writes_nothing(self, tmp_path, use_fake_provider):
        use_fake_provider["fail_on"] = {"World"}
        source = tmp_path / "page.html"
        source.write_text("<div><h1>Hello</h1><p>World</p></div>", encoding="utf-8")
        output = tmp_path / "out.html"

        assert translate.main(["-i", str(source), "-o", str(output), "--no-color"]) == 1
        assert not output.exists()

    def test_local_openai_endpoint_needs_no_key(self, tmp_path, use_fake_provider):
        source = tmp_path / "page.html"
        source.write_text("<p>Hello</p>", encoding="utf-8")
        output = tmp_path / "out.html"

        exit_code = translate.main([
            "-i", str(source), "-o", str(output), "--provider", "openai", "--openai_api_key", "",
            "--api_endpoint", "http://localhost:1234/v1/chat/completions", "--no-color"
        ])

        assert exit_code == 0
        assert "TR:Hello" in output.read_text(encoding="utf-8")

    def test_openai_cloud_endpoint_requires_key(self, tmp_path):
        with pytest.raises(SystemExit):
            translate.main([
                "-i", str(tmp_path / "a.html"), "--provider", "openai", "--openai_api_key", "",
                "--api_endpoint", "https://api.openai.com/v1/chat/completions"
            ])

    def test_missing_input(self, tmp_path, use_fake_provider):
        assert translate.main(["-i", str(tmp_path / "missing.html"), "--no-color"]) == 1

    def test_invalid_concurrency(self, tmp_path):
        with pytest.raises(SystemExit):
            translate.main(["-i", str(tmp_path / "a.html"), "--concurrency", "0"])
