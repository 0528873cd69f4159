"""Configuration management for netlify-headers.

Two layers:

1. **PluginOptions** - what headers to produce. Mirrors the options a site
   declares for the headers plugin (``headers``, ``mergeSecurityHeaders``,
   ``mergeLinkHeaders``, ``mergeCachingHeaders``, ``allPageHeaders``,
   ``transformHeaders``). Validated once; later stages trust it.

2. **BuildSettings** - where the build lives (public directory, manifest and
   pages files, path prefix). Read from ``netlify_headers.yaml`` and from
   ``NETLIFY_HEADERS_*`` environment variables.

Example ``netlify_headers.yaml``::

    netlify_headers:
      public_dir: public
      path_prefix: /blog
      plugin:
        headers:
          /*:
            - "Basic-Auth: someuser:somepassword"
          /my-page:
            - "Link: </app.js>; rel=preload; as=script"
        mergeSecurityHeaders: true
        allPageHeaders:
          - "Link: </fonts/inter.woff2>; rel=preload; as=font"
        transformHeaders: mysite.headers.strip_basic_auth
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from netlify_headers.errors import OptionsShapeError
from netlify_headers.headers import HeaderTable, header_name
from netlify_headers.preload import normalize_path_prefix

logger = logging.getLogger(__name__)

TransformFn = Callable[[list[str], str], list[str]]

CONFIG_FILENAME = "netlify_headers.yaml"
CONFIG_SECTION = "netlify_headers"


def identity_transform(headers: list[str], path: str) -> list[str]:
    """Default transform_headers hook: keep the lines as they are."""
    return headers


def import_callable(import_path: str) -> Any:
    """Import ``package.module.attr`` or ``package.module:attr``.

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the module has no such attribute
    """
    if ":" in import_path:
        module_path, attr = import_path.split(":", 1)
    else:
        module_path, attr = import_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, attr)


def _check_header_lines(lines: list[str], where: str) -> list[str]:
    for header in lines:
        if header_name(header) is None:
            raise ValueError(f"header {header!r} at {where} has no name (expected 'Name: value')")
    return lines


class PluginOptions(BaseModel):
    """Options controlling which headers end up in the file."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    headers: dict[StrictStr, list[StrictStr]] = Field(default_factory=dict)
    """User headers: path → list of header lines"""

    merge_security_headers: StrictBool = True
    """Merge the recommended security headers (user headers win by name)"""

    merge_link_headers: StrictBool = True
    """Add per-page preload Link headers for required script chunks"""

    merge_caching_headers: StrictBool = True
    """Add immutable caching headers for hashed files and the static caching rules"""

    all_page_headers: list[StrictStr] | None = None
    """Header lines duplicated onto every page path"""

    transform_headers: TransformFn = identity_transform
    """Final hook called with (header_lines, path) for every path"""

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_mapping(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("must be a mapping of path to a list of header strings")
        return value

    @field_validator("headers")
    @classmethod
    def _headers_named(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        for path, lines in value.items():
            _check_header_lines(lines, f"path '{path}'")
        return value

    @field_validator("all_page_headers")
    @classmethod
    def _all_page_headers_named(cls, value: list[str] | None) -> list[str] | None:
        if value is not None:
            _check_header_lines(value, "allPageHeaders")
        return value

    @field_validator("transform_headers", mode="before")
    @classmethod
    def _import_transform(cls, value: Any) -> Any:
        if value is None:
            return identity_transform
        if isinstance(value, str):
            try:
                return import_callable(value)
            except (ImportError, AttributeError, ValueError) as e:
                raise ValueError(f"cannot import transform_headers '{value}': {e}") from e
        return value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> PluginOptions:
        """Validate raw plugin options.

        Args:
            data: Options as declared by the site (camelCase or snake_case keys)

        Returns:
            Validated PluginOptions

        Raises:
            OptionsShapeError: If any option is in the wrong shape
        """
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as e:
            problems = []
            for err in e.errors():
                loc = ".".join(str(part) for part in err["loc"]) or "options"
                problems.append(f"  - {loc}: {err['msg']}")
            raise OptionsShapeError(
                "The headers plugin options are in the wrong shape. "
                "'headers' must map paths to lists of 'Name: value' strings, the merge* "
                "options must be booleans and 'transformHeaders' must be a function "
                "that returns a list of header strings.\n" + "\n".join(problems)
            ) from e

    def user_headers(self) -> HeaderTable:
        """A fresh copy of the declared header table."""
        return {path: list(lines) for path, lines in self.headers.items()}


class BuildSettings(BaseSettings):
    """Where the site build lives and how it is deployed."""

    model_config = SettingsConfigDict(
        env_prefix="NETLIFY_HEADERS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Directory deployed as the site root; _headers is written here
    public_dir: Path = Path("public")

    # Build manifest (asset name → hashed file name(s)); defaults to <public_dir>/chunk-map.json
    manifest_path: Path | None = None

    # Page list; defaults to <public_dir>/pages.json
    pages_path: Path | None = None

    path_prefix: str = ""
    debug: bool = False

    plugin: PluginOptions = Field(default_factory=PluginOptions)

    config_path: Path | None = None

    @field_validator("path_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        return normalize_path_prefix(value)

    @property
    def resolved_manifest_path(self) -> Path:
        return self.manifest_path or self.public_dir / "chunk-map.json"

    @property
    def resolved_pages_path(self) -> Path:
        return self.pages_path or self.public_dir / "pages.json"

    @classmethod
    def from_yaml(cls, yaml_path: Path, **kwargs: Any) -> BuildSettings:
        """Load settings from the ``netlify_headers`` section of a YAML file.

        Relative paths in the file are resolved against the file's directory.
        Keyword arguments take precedence over the file.

        Args:
            yaml_path: Path to netlify_headers.yaml
            **kwargs: Overrides

        Returns:
            BuildSettings instance

        Raises:
            OptionsShapeError: If the plugin section is in the wrong shape
        """
        section: dict[str, Any] = {}
        if yaml_path.exists():
            with yaml_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise OptionsShapeError(f"{yaml_path} must contain a mapping")
            section = data.get(CONFIG_SECTION) or {}
            if not isinstance(section, dict):
                raise OptionsShapeError(f"'{CONFIG_SECTION}' in {yaml_path} must be a mapping")
            logger.info("Loaded settings from %s", yaml_path)
        else:
            logger.info("%s not found, using default settings", yaml_path)

        base_dir = yaml_path.parent
        for key in ("public_dir", "manifest_path", "pages_path"):
            if section.get(key) is not None:
                path = Path(section[key])
                section[key] = path if path.is_absolute() else base_dir / path

        if "plugin" in section:
            section["plugin"] = PluginOptions.from_mapping(section["plugin"])

        merged = {**section, **{k: v for k, v in kwargs.items() if v is not None}}
        return cls(config_path=yaml_path, **merged)
