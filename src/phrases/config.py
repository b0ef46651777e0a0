"""Configuration helpers for word cloud generation."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml
from jsonschema import ValidationError, validate

from . import DataSourceConfig
from .frequency import DEFAULT_LIMIT
from .palette import palette_for
from .stopwords import build_stopwords
from .tagger import DEFAULT_MODEL

__all__ = [
    "CONFIG_SCHEMA",
    "DEFAULT_SOURCES",
    "WordCloudConfig",
    "load_wordcloud_config",
]

_DEFAULT_CONFIG_PATH = Path("config/wordcloud.yaml")

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

# JSON Schema for wordcloud.yaml files
CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "phrases": {
            "type": "object",
            "properties": {
                "limit": {"type": "integer", "minimum": 1},
                "model": {"type": "string", "minLength": 1},
                "extra_stopwords": _STRING_LIST,
                "replace_stopwords": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
        "palette": {
            "type": "object",
            "properties": {
                "mode": {"type": "string", "minLength": 1},
                "colors": _STRING_LIST,
            },
            "additionalProperties": False,
        },
        "sources": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "text_field"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "label": {"type": "string"},
                    "file": {"type": "string"},
                    "region_field": {"type": "string", "minLength": 1},
                    "text_field": {"type": "string", "minLength": 1},
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}

DEFAULT_SOURCES: tuple[DataSourceConfig, ...] = (
    DataSourceConfig(
        id="services",
        label="Service Descriptions",
        region_field="postcode",
        text_field="text_summary",
        file="services.csv",
    ),
    DataSourceConfig(
        id="feedback",
        label="Feedback Text",
        region_field="postcode",
        text_field="feedback_text",
        file="feedback.csv",
    ),
)


@dataclass(slots=True)
class WordCloudConfig:
    """Validated settings for phrase extraction, colouring and data sources."""

    limit: int = DEFAULT_LIMIT
    model: str = DEFAULT_MODEL
    extra_stopwords: tuple[str, ...] = ()
    replace_stopwords: bool = False
    palette_mode: str = "light"
    palette_colors: tuple[str, ...] = ()
    sources: tuple[DataSourceConfig, ...] = DEFAULT_SOURCES
    base_path: Path | None = field(default=None, compare=False)

    @classmethod
    def default(cls) -> "WordCloudConfig":
        return cls()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], *, base_path: Path | None = None) -> "WordCloudConfig":
        if not isinstance(payload, Mapping):
            raise ValueError("Word cloud configuration must be a mapping.")

        phrases = _ensure_mapping(payload.get("phrases"), section="phrases")
        palette = _ensure_mapping(payload.get("palette"), section="palette")

        palette_mode = str(palette.get("mode") or "light").strip().lower()
        # Validates the mode eagerly so typos surface at load time.
        palette_for(palette_mode)

        sources_payload = payload.get("sources")
        sources = DEFAULT_SOURCES if sources_payload is None else _build_sources(sources_payload)

        return cls(
            limit=_coerce_int(phrases.get("limit"), DEFAULT_LIMIT, minimum=1),
            model=str(phrases.get("model") or DEFAULT_MODEL).strip(),
            extra_stopwords=_normalize_strings(phrases.get("extra_stopwords")),
            replace_stopwords=_coerce_bool(phrases.get("replace_stopwords"), False),
            palette_mode=palette_mode,
            palette_colors=_normalize_strings(palette.get("colors")),
            sources=sources,
            base_path=base_path,
        )

    def stopwords(self) -> frozenset[str]:
        return build_stopwords(self.extra_stopwords, replace=self.replace_stopwords)

    def palette(self) -> tuple[str, ...]:
        if self.palette_colors:
            return self.palette_colors
        return palette_for(self.palette_mode)

    def source(self, source_id: str) -> DataSourceConfig:
        for source in self.sources:
            if source.id == source_id:
                return source
        available = ", ".join(source.id for source in self.sources) or "none"
        raise KeyError(f"Unknown data source '{source_id}'. Available: {available}")

    def resolve_file(self, source: DataSourceConfig) -> Path | None:
        """Return the records file for ``source`` relative to the config location."""

        if not source.file:
            return None
        candidate = Path(source.file).expanduser()
        if candidate.is_absolute() or self.base_path is None:
            return candidate
        return self.base_path / candidate


def load_wordcloud_config(path: Path | None = None) -> WordCloudConfig:
    """Load word cloud configuration from YAML or fall back to defaults."""

    if path is not None:
        resolved = Path(path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Word cloud config '{resolved}' does not exist")
        return WordCloudConfig.from_mapping(_load_yaml(resolved), base_path=resolved.parent)

    if _DEFAULT_CONFIG_PATH.exists():
        return WordCloudConfig.from_mapping(
            _load_yaml(_DEFAULT_CONFIG_PATH),
            base_path=_DEFAULT_CONFIG_PATH.parent,
        )
    return WordCloudConfig.default()


def _load_yaml(path: Path) -> Mapping[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in word cloud config '{path}': {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("Word cloud config must be a mapping at the top level.")

    try:
        validate(instance=data, schema=CONFIG_SCHEMA)
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ValueError(f"Word cloud config validation failed at {location}: {exc.message}") from exc
    return data


def _ensure_mapping(payload: object, *, section: str) -> Mapping[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"Word cloud configuration section '{section}' must be a mapping.")
    return payload


def _build_sources(payload: object) -> tuple[DataSourceConfig, ...]:
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        raise ValueError("Word cloud configuration section 'sources' must be a list.")

    sources: list[DataSourceConfig] = []
    seen: set[str] = set()
    for index, entry in enumerate(payload):
        section = f"sources[{index}]"
        mapping = _ensure_mapping(entry, section=section)
        source_id = str(mapping.get("id") or "").strip()
        text_field = str(mapping.get("text_field") or "").strip()
        if not source_id:
            raise ValueError(f"Word cloud configuration '{section}' requires an 'id'.")
        if not text_field:
            raise ValueError(f"Word cloud configuration '{section}' requires a 'text_field'.")
        if source_id in seen:
            raise ValueError(f"Duplicate data source id '{source_id}'.")
        seen.add(source_id)
        file_value = mapping.get("file")
        sources.append(
            DataSourceConfig(
                id=source_id,
                label=str(mapping.get("label") or source_id).strip(),
                region_field=str(mapping.get("region_field") or "postcode").strip(),
                text_field=text_field,
                file=str(file_value).strip() if file_value else None,
            )
        )
    return tuple(sources)


def _normalize_strings(values: object) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, (list, tuple, set)):
        return ()
    tokens: list[str] = []
    for raw in values:
        token = str(raw).strip()
        if token:
            tokens.append(token)
    return tuple(dict.fromkeys(tokens))


def _coerce_int(value: object, default: int, *, minimum: int = 1) -> int:
    try:
        coerced = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return coerced if coerced >= minimum else default


def _coerce_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "y"}:
            return True
        if lowered in {"false", "0", "no", "n"}:
            return False
    if isinstance(value, (int, float)):
        return bool(value)
    return default
