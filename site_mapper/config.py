# === FILE: site_mapper/config.py ===
"""
Модуль для загрузки и валидации конфигурации обхода SiteMapper.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_mapper.crawler.urls import parse_seed

__all__ = ("CrawlConfig", "load_config", "DEFAULT_CONFIG_PATH")


class CrawlConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: str = Field(..., description="Стартовый URL обхода.")
    max_depth: int = Field(5, ge=0, description="Максимальная глубина обхода ссылок.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SiteMapperBot/1.0", min_length=1, description="Заголовок User-Agent.")
    max_concurrency: Optional[int] = Field(
        None, ge=1, description="Лимит одновременных запросов (None: без ограничения)."
    )

    @field_validator("seed_url", mode="before")
    def _canonical_seed(cls, v: Any) -> Any:
        if isinstance(v, str):
            # SeedParseError наследует ValueError -> ValidationError
            return parse_seed(v)
        return v


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


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


def _read_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CrawlConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlConfig.

    Без явного пути используется configs/default.yaml, если он существует.
    Явно указанный, но отсутствующий файл -> FileNotFoundError.
    Значения из *overrides* (кроме None) перекрывают значения из файла.
    """
    data: Dict[str, Any] = {}
    if path is None:
        if DEFAULT_CONFIG_PATH.is_file():
            data = _read_file(DEFAULT_CONFIG_PATH)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    return CrawlConfig(**data)
