# tests/test_rendering.py
"""Tests for the Jinja2 template renderer."""

from __future__ import annotations

import pytest

from frontend.errors import TemplateRenderError
from frontend.presenters.schemas import PageView
from frontend.rendering import TemplateRenderer


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def view(**overrides) -> PageView:
    data = dict(
        schema_name="case_study",
        base_path="/government/case-studies/x",
        locale="en",
        template_key="case_study",
        title="A <case> study",
        page_title="A <case> study",
        body="<p>Trusted body</p>",
    )
    data.update(overrides)
    return PageView(**data)


class TestTemplateRenderer:
    def test_schema_label_translations(self, renderer):
        assert renderer.schema_label("case_study", "es") == "Estudio de caso"
        assert renderer.schema_label("case_study", "xx") == renderer.schema_label("case_study", "en")
        assert renderer.schema_label("made_up_schema", "en") == "Made up schema"

    def test_escapes_text_but_not_body_html(self, renderer):
        html = renderer.render("case_study", "en", view()).decode("utf-8")

        assert "A &lt;case&gt; study" in html
        assert "<p>Trusted body</p>" in html

    def test_renders_xml_templates(self, renderer):
        body = renderer.render(
            "travel_advice_feed",
            "en",
            view(schema_name="travel_advice", template_key="travel_advice_feed", feed_title="Feed"),
        )
        assert body.startswith(b"<?xml")
        assert b"<title>Feed</title>" in body

    def test_missing_template(self, renderer):
        with pytest.raises(TemplateRenderError, match="Template not found"):
            renderer.render("no_such_template", "en", view())

    def test_error_page(self, renderer):
        html = renderer.render_error(404, "Page not found").decode("utf-8")
        assert "Page not found" in html
        assert "Error 404" in html
