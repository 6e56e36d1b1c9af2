"""
Загрузка и валидация конфигурации анализатора SerpScout.
Схема описана через Pydantic, файлы читаются из YAML или JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator, model_validator


class AnalyzerConfig(BaseModel):
    """Настройки одного запуска анализа страницы."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    page_url: Optional[HttpUrl] = Field(
        None, description="URL анализируемой страницы (canonical, превью SERP)."
    )
    device: Literal["desktop", "mobile"] = Field(
        "desktop", description="Чей лимит в пикселях использовать для превью."
    )
    ellipsis: str = Field("...", description="Многоточие для обрезанных сниппетов.")
    x_robots_tag: Optional[str] = Field(None, description="Значение заголовка X-Robots-Tag.")
    max_heading_length: int = Field(70, ge=1, description="Порог длинного заголовка.")
    template_dir: Optional[str] = Field(
        None, description="Папка с Jinja2-шаблонами HTML-отчёта."
    )

    @field_validator("x_robots_tag", mode="before")
    def _blank_header_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _check_template_dir(self) -> AnalyzerConfig:
        if self.template_dir is not None and not Path(self.template_dir).expanduser().is_dir():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), self.template_dir)
        return self

    @property
    def page_url_str(self) -> Optional[str]:
        return str(self.page_url) if self.page_url is not None else None


DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> AnalyzerConfig:
    """
    Читает YAML или JSON и возвращает проверенный AnalyzerConfig.
    Без пути берётся configs/default.yaml, а если его нет, значения по умолчанию.
    Непустые ``overrides`` (например, из опций CLI) перекрывают значения файла.
    """
    if path is None:
        path_obj: Optional[Path] = DEFAULT_CFG if DEFAULT_CFG.is_file() else None
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    data: dict[str, Any] = {}
    if path_obj is not None:
        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return AnalyzerConfig(**data)
