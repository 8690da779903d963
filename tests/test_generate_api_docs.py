"""Tests for the static API documentation script."""
from scripts.generate_api_docs import generate_docs, render_docs


def test_render_embeds_openapi_spec(service):
    from main import create_app

    html = render_docs(create_app(service))

    assert "SwaggerUIBundle" in html
    assert "/stats/comparison" in html
    assert "/stats/students/{student_id}/progress" in html


def test_generate_creates_output_dir(service, tmp_path):
    from main import create_app

    app = create_app(service)
    target = generate_docs(app, str(tmp_path / "docs"))

    assert target == tmp_path / "docs" / "index.html"
    content = target.read_text(encoding="utf-8")
    assert f"API Documentation - {app.title}" in content
