import json
from pathlib import Path

from fastapi import FastAPI

from config.settings import settings

# ✅ Swagger UI 정적 페이지 템플릿 (스펙은 인라인으로 삽입)
HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="fr">
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@latest/swagger-ui.css">
</head>
<body>
    <div id="swagger-ui"></div>
    <script src="https://unpkg.com/swagger-ui-dist@latest/swagger-ui-bundle.js"></script>
    <script>
        window.onload = function() {{
            SwaggerUIBundle({{
                spec: {spec},
                dom_id: '#swagger-ui',
            }});
        }}
    </script>
</body>
</html>
"""


def render_docs(app: FastAPI) -> str:
    spec = json.dumps(app.openapi(), ensure_ascii=False, indent=2)
    return HTML_TEMPLATE.format(title=f"API Documentation - {app.title}", spec=spec)


def generate_docs(app: FastAPI, output_dir: str = settings.DOCS_OUTPUT_DIR) -> Path:
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    target = out / "index.html"
    target.write_text(render_docs(app), encoding="utf-8")
    return target


if __name__ == "__main__":
    from main import app

    path = generate_docs(app)
    print(f"✅ API 문서 생성 완료: {path}")
