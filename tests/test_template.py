"""
Template splicer and capsule wrapper tests
"""

import tempfile
from pathlib import Path

import pytest

from twinsite.lib.errors import ConfigurationError, MalformedTemplateError
from twinsite.lib.template import template_split, template_load, content_splice
from twinsite.lib.wrapper import capsule_wrap
from twinsite.models.template import WrapperTemplate


class TestTemplateSplit:
    """Test splitting at the content marker"""

    def test_splice_exact(self):
        assert content_splice("HEADER<!-- CONTENT -->FOOTER", "BODY") == "HEADERBODYFOOTER"

    def test_split_parts(self):
        template = template_split("<html>\n<!-- CONTENT -->\n</html>")
        assert template.header == "<html>\n"
        assert template.footer == "\n</html>"

    def test_marker_at_edges(self):
        assert template_split("<!-- CONTENT -->") == WrapperTemplate(header="", footer="")

    def test_missing_marker_raises(self):
        with pytest.raises(MalformedTemplateError):
            template_split("no marker here")

    def test_malformed_is_configuration_error(self):
        """Malformed templates are fatal configuration problems"""
        with pytest.raises(ConfigurationError):
            content_splice("<!-- CONTENT", "BODY")

    def test_repeated_marker_splits_at_first(self):
        template = template_split("A<!-- CONTENT -->B<!-- CONTENT -->C")
        assert template.header == "A"
        assert template.footer == "B<!-- CONTENT -->C"

    def test_custom_marker(self):
        assert content_splice("[[x]]{{BODY}}[[y]]", "z", marker="{{BODY}}") == "[[x]]z[[y]]"


class TestTemplateLoad:
    """Test reading wrapper files"""

    def test_load(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "_wrapper.html"
            path.write_text("top<!-- CONTENT -->bottom", encoding="utf-8")
            assert template_load(path) == WrapperTemplate(header="top", footer="bottom")

    def test_crlf_template_kept(self):
        """Header and footer keep their CRLF line endings"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "_wrapper.gmi"
            path.write_bytes(b"H\r\n<!-- CONTENT -->\r\nF\r\n")
            template = template_load(path)
            assert template.header == "H\r\n"
            assert template.footer == "\r\nF\r\n"
            assert template.splice("BODY").encode("utf-8") == b"H\r\nBODY\r\nF\r\n"

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigurationError, match="not found"):
                template_load(Path(tmpdir) / "_wrapper.html")

    def test_malformed_file_names_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "_wrapper.gmi"
            path.write_text("# no marker", encoding="utf-8")
            with pytest.raises(MalformedTemplateError, match="_wrapper.gmi"):
                template_load(path)


class TestCapsuleWrap:
    """Test passthrough wrapping"""

    def test_body_untouched(self):
        """Capsule output is header + source + footer, byte for byte"""
        source = "# Title\r\n* item\n```\n  <raw> & stuff\n```\n\n\n"
        template = WrapperTemplate(header="# Site\n", footer="\n=> / Home")
        assert capsule_wrap(source, template) == "# Site\n" + source + "\n=> / Home"

    def test_empty_source(self):
        assert capsule_wrap("", WrapperTemplate(header="H", footer="F")) == "HF"
