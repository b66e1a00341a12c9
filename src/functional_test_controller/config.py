"""Configuration models for functional test sessions."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserConfig(BaseModel):
    """Settings for the browser launched for each test."""

    name: str = Field(default="chromium")
    channel: Optional[str] = None
    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 720
    has_touch: bool = False
    slow_mo: Optional[float] = Field(
        default=None,
        description="Delay in milliseconds inserted between engine operations.",
    )
    virtual_display: bool = Field(
        default=False,
        description="Run headed browsers inside a virtual X display.",
    )


class ScreenshotConfig(BaseModel):
    """Where and when failure screenshots are written."""

    path: Path = Path("reports/screenshots")
    take_on_fails: bool = True


class ControllerConfig(BaseSettings):
    """Top-level configuration for controller sessions."""

    model_config = SettingsConfigDict(
        env_prefix="FUNCTIONAL_TEST_CONTROLLER_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    screenshots: ScreenshotConfig = Field(default_factory=ScreenshotConfig)
    implicit_wait: Optional[float] = Field(
        default=None,
        description="Seconds element lookups wait for a match; engine default when unset.",
    )
    navigation_timeout: Optional[float] = Field(
        default=None,
        description="Seconds navigations may take; engine default when unset.",
    )
    launch_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for the browser session to become available.",
    )


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    browser_name: str | None = None,
    headless: bool | None = None,
    **overrides: object,
) -> ControllerConfig:
    """Load configuration from an optional YAML file, the environment and overrides.

    ``browser_name`` and ``headless`` are the browser choices made on a command
    line or pytest option; when given they win over every other source.
    """

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    if overrides:
        _deep_update(data, overrides)
    browser: dict[str, object] = {}
    if browser_name:
        browser["name"] = browser_name
    if headless is not None:
        browser["headless"] = headless
    if browser:
        _deep_update(data, {"browser": browser})
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    config = ControllerConfig(**data, **settings_kwargs)
    if not data:
        return config

    merged = config.model_dump(mode="python")
    _deep_update(merged, data)
    return ControllerConfig.model_validate(merged)


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively merge ``updates`` into ``target`` in-place."""

    for key, value in updates.items():
        if (
            isinstance(value, Mapping)
            and isinstance(existing := target.get(key), Mapping)
        ):
            nested: dict[str, Any] = existing if isinstance(existing, dict) else dict(existing)
            _deep_update(nested, value)
            target[key] = nested
        else:
            target[key] = value
