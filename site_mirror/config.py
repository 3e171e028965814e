# === FILE: site_mirror/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteMirror.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_mirror.utils import parse_duration

__all__ = ("OverwritePolicy", "FetchErrorPolicy", "MirrorConfig", "load_config")


class OverwritePolicy(str, Enum):
    """Что делать, если локальный путь уже существует."""

    SKIP = "skip"  # permissive
    FAIL = "fail"  # strict


class FetchErrorPolicy(str, Enum):
    """Что делать при ошибке загрузки ресурса."""

    ABORT = "abort"
    SKIP = "skip"


class MirrorConfig(BaseModel):
    """Конфигурация для одного запуска зеркалирования."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root: Path = Field(Path("."), description="Корневая директория локального хранилища.")
    overwrite: OverwritePolicy = Field(
        OverwritePolicy.SKIP, description="skip — пропустить существующий файл, fail — ошибка."
    )
    max_depth: Optional[int] = Field(None, ge=0, description="Максимальная глубина обхода ссылок.")
    max_pages: Optional[int] = Field(None, ge=1, description="Жесткий лимит по числу сохранённых ресурсов.")
    timeout: Optional[float] = Field(None, description="Дедлайн всего обхода (секунд или '5m').")
    request_timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SiteMirror/0.1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429 и сетевых ошибках.")
    on_fetch_error: FetchErrorPolicy = Field(
        FetchErrorPolicy.ABORT, description="abort — остановить обход, skip — пропустить ресурс."
    )
    fallback_encoding: Optional[str] = Field(
        None, description="Кодировка HTML, если сервер её не объявил."
    )

    @field_validator("timeout", mode="before")
    def _parse_timeout(cls, v: Any) -> Any:
        return parse_duration(v)

    @field_validator("root", mode="before")
    def _expand_root(cls, v: Any) -> Any:
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> MirrorConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект MirrorConfig.
    Без пути возвращает конфигурацию по умолчанию.
    """
    if path is None:
        return MirrorConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return MirrorConfig(**data)
