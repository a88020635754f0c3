"""Configuration loader for the news pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

# Config directory at the repository root
CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "configs"


@dataclass
class StoreConfig:
    path: str = "data/news.json"
    max_items: int = 200


@dataclass
class HistoryConfig:
    path: str = "data/history.json"


@dataclass
class IngestConfig:
    decoder: str = "regex"  # "regex" or "feedparser"
    request_timeout: int = 30
    max_workers: int = 4
    sources: list[str] = field(default_factory=list)


@dataclass
class GenerateConfig:
    posts_dir: str = "post"
    fallback_page: str = "index.html"
    highlight_count: int = 5


@dataclass
class EnrichmentConfig:
    enabled: bool = True
    model: str = "gpt-4o-mini"
    timeout: float = 30.0
    max_tokens: int = 1500
    context_count: int = 5


@dataclass
class ManifestConfig:
    path: str = "post/posts.json"


@dataclass
class Config:
    store: StoreConfig = field(default_factory=StoreConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    generate: GenerateConfig = field(default_factory=GenerateConfig)
    enrichment: EnrichmentConfig = field(default_factory=EnrichmentConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML file. If None, uses configs/<CONFIG_ENV>.yaml
              with CONFIG_ENV defaulting to "default".

    Returns:
        Loaded Config object
    """
    if path is None:
        config_name = os.environ.get("CONFIG_ENV", "default")
        path = CONFIG_DIR / f"{config_name}.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: dict) -> Config:
    """Parse config dictionary into Config object."""
    store_data = data.get("store", {}) or {}
    history_data = data.get("history", {}) or {}
    ingest_data = data.get("ingest", {}) or {}
    generate_data = data.get("generate", {}) or {}
    enrichment_data = data.get("enrichment", {}) or {}
    manifest_data = data.get("manifest", {}) or {}

    store = StoreConfig(
        path=store_data.get("path", "data/news.json"),
        max_items=int(store_data.get("max_items", 200)),
    )

    history = HistoryConfig(
        path=history_data.get("path", "data/history.json"),
    )

    ingest = IngestConfig(
        decoder=ingest_data.get("decoder", "regex"),
        request_timeout=int(ingest_data.get("request_timeout", 30)),
        max_workers=int(ingest_data.get("max_workers", 4)),
        sources=list(ingest_data.get("sources", []) or []),
    )

    generate = GenerateConfig(
        posts_dir=generate_data.get("posts_dir", "post"),
        fallback_page=generate_data.get("fallback_page", "index.html"),
        highlight_count=int(generate_data.get("highlight_count", 5)),
    )

    enrichment = EnrichmentConfig(
        enabled=bool(enrichment_data.get("enabled", True)),
        model=enrichment_data.get("model", "gpt-4o-mini"),
        timeout=float(enrichment_data.get("timeout", 30.0)),
        max_tokens=int(enrichment_data.get("max_tokens", 1500)),
        context_count=int(enrichment_data.get("context_count", 5)),
    )

    manifest = ManifestConfig(
        path=manifest_data.get("path", "post/posts.json"),
    )

    return Config(
        store=store,
        history=history,
        ingest=ingest,
        generate=generate,
        enrichment=enrichment,
        manifest=manifest,
    )
