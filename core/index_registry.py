"""
Index Registry — реестр ссылок административного index-а.

Хранит секции вида section -> (path -> description).
Модули добавляют ссылки при регистрации (или в любой момент позже),
HTTP-слой рендерит снимок реестра в HTML-страницу.

Не выполняет HTTP-запросы и не зависит от фреймворков.
"""

import threading
from dataclasses import dataclass
from typing import Dict, List


# Зарезервированные секции. Это только метки: реестр ничего не проверяет,
# подтверждения и авторизация для опасных endpoints — забота HTTP-слоя.
SECTION_ADMIN_ENDPOINTS = "Admin Endpoints:"
SECTION_DANGEROUS = "Dangerous:"


@dataclass(frozen=True)
class AdminLink:
    """Описание одной ссылки index-а.

    Поля:
      - section: секция (заголовок группы ссылок)
      - path: путь endpoint-а без http-префикса
      - description: текст ссылки
    """
    section: str
    path: str
    description: str


class IndexPageContent:
    """Потокобезопасный реестр ссылок index-страницы.

    Создаётся один раз в CoreRuntime и передаётся модулям по ссылке.
    Все операции выполняются под одним `threading.Lock`, внутри которого
    нет I/O, поэтому реестр можно вызывать и из event loop, и из потоков.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._content: Dict[str, Dict[str, str]] = {}

    def add_link(self, section: str, path: str, description: str) -> None:
        """
        Добавить ссылку в секцию.

        Повторная регистрация той же пары (section, path) перезаписывает
        описание (побеждает последний).
        """
        with self._lock:
            section_map = self._content.get(section)
            if section_map is None:
                section_map = {}
                self._content[section] = section_map
            section_map[path] = description

    def get_content(self) -> Dict[str, Dict[str, str]]:
        """Вернуть независимую копию содержимого реестра."""
        with self._lock:
            return {section: dict(links) for section, links in self._content.items()}

    def links(self) -> List[AdminLink]:
        """Вернуть все ссылки плоским списком, отсортированным по (section, path)."""
        content = self.get_content()
        return [
            AdminLink(section=section, path=path, description=content[section][path])
            for section in sorted(content)
            for path in sorted(content[section])
        ]
