"""
Рендеринг административной index-страницы.

Принимает снимок IndexPageContent и http-префикс, возвращает HTML.
Секции и пути сортируются, чтобы страница была одинаковой между вызовами.
"""

import posixpath
from typing import Dict

from jinja2 import Environment, select_autoescape


INDEX_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
	<head>
		<meta charset="UTF-8">
		<title>{{ title }}</title>
	</head>
	<body>
		<h1>{{ title }}</h1>
		{% for section, links in sections %}
		<p>{{ section }}</p>
		<ul>
			{% for path, description in links %}
				<li><a href="{{ path | add_path_prefix }}">{{ description }}</a></li>
			{% endfor %}
		</ul>
		{% endfor %}
	</body>
</html>
"""


def join_path_prefix(prefix: str, path: str) -> str:
    """
    Склеить http-префикс и путь ссылки.

    Пустые части игнорируются, результат нормализуется:
    join_path_prefix("/api/", "/config") -> "/api/config".
    """
    parts = [p for p in (prefix, path) if p]
    if not parts:
        return ""
    joined = posixpath.normpath("/".join(parts))
    # normpath сохраняет ведущий "//" (POSIX)
    if joined.startswith("//"):
        joined = "/" + joined.lstrip("/")
    return joined


def render_index_page(content: Dict[str, Dict[str, str]], path_prefix: str = "", title: str = "Runtime") -> str:
    """
    Отрендерить index-страницу.

    Args:
        content: снимок реестра (section -> path -> description)
        path_prefix: http-префикс, добавляемый к каждому пути
        title: заголовок страницы

    Returns:
        HTML-документ
    """
    env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))
    env.filters["add_path_prefix"] = lambda link: join_path_prefix(path_prefix, link)
    template = env.from_string(INDEX_PAGE_TEMPLATE)

    sections = [
        (section, sorted(content[section].items()))
        for section in sorted(content)
    ]
    return template.render(title=title, sections=sections)
