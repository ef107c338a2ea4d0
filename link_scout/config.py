"""
Модуль для загрузки и валидации конфигурации LinkScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class CheckerConfig(BaseModel):
    """Конфигурация для одного запуска проверки ссылок."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Корневой URL сайта (origin).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("LinkScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    concurrency: int = Field(4, ge=1, description="Число одновременных запросов.")
    rate_limit: Optional[float] = Field(None, gt=0, description="Лимит запросов в секунду.")
    follow_redirects: bool = Field(True, description="Следовать ли HTTP-редиректам.")
    skip_marker: str = Field(
        "cdn-cgi", min_length=1, description="Подстрока ссылок, которые не являются страницами."
    )

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @property
    def origin(self) -> str:
        """Базовый URL без завершающего слеша: префикс всех ссылок сайта."""
        return str(self.base_url).rstrip("/")


_DEFAULT_CFG = Path("configs/default.yaml")


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
    path: Union[str, Path, None],
    overrides: Optional[Mapping[str, Any]] = None,
) -> CheckerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CheckerConfig.

    Значения из ``overrides`` (ключи со значением None пропускаются)
    перекрывают значения из файла. Если ``path`` не указан и
    configs/default.yaml отсутствует, конфиг строится только из overrides,
    при условии что в них есть base_url; иначе бросает FileNotFoundError.
    """
    extra = {k: v for k, v in (overrides or {}).items() if v is not None}

    if path is None:
        if _DEFAULT_CFG.exists():
            data = _read_file(_DEFAULT_CFG)
        elif "base_url" in extra:
            data = {}
        else:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update(extra)
    return CheckerConfig(**data)


__all__ = ["CheckerConfig", "load_config"]
