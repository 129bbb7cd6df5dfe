from __future__ import annotations
from collections.abc import Mapping
from functools import partial
from pathlib import Path
import yaml
from jinja2 import BaseLoader, Environment, FileSystemLoader

from errors import ConfigError
from excerpt import DEFAULT_RULES, MarkerRule, build_rules, extract_excerpt
from filters import date_iso, date_readable

_DIR_KEYS = {
    "input": "input_dir",
    "output": "output_dir",
    "includes": "includes_dir",
    "layouts": "layouts_dir",
    "data": "data_dir",
}

class TemplatingConfig:
    def __init__(
        self,
        *,
        input_dir: str = "src",
        output_dir: str = "_site",
        includes_dir: str = "_includes",
        layouts_dir: str = "_includes",
        data_dir: str = "_data",
        passthrough_copy: list[str] | None = None,
        excerpt_rules: tuple[MarkerRule, ...] = DEFAULT_RULES,
    ):
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.includes_dir = includes_dir
        self.layouts_dir = layouts_dir
        self.data_dir = data_dir
        self.passthrough_copy = list(passthrough_copy) if passthrough_copy is not None else ["src/css"]
        self.excerpt_rules = excerpt_rules

    def directories(self) -> dict[str, str]:
        return {key: getattr(self, attr) for key, attr in _DIR_KEYS.items()}

    def template_dirs(self) -> list[str]:
        base = Path(self.input_dir)
        dirs = [str(base / self.includes_dir)]
        if self.layouts_dir != self.includes_dir:
            dirs.append(str(base / self.layouts_dir))
        return dirs

_TOP_KEYS = {"dir", "passthrough_copy", "excerpt"}

def _check_keys(path, section: str, found, allowed):
    unknown = sorted(set(found) - set(allowed), key=str)
    if unknown:
        raise ConfigError(f"{path}: unknown {section} key(s): {', '.join(map(repr, unknown))}")

def load_templating_config(path: str | Path) -> TemplatingConfig:
    """Read config.yaml. Missing keys keep their defaults; bad shapes raise ConfigError."""
    try:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"{path}: {e}") from e
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{path}: top level must be a mapping")
    _check_keys(path, "top-level", raw, _TOP_KEYS)

    kwargs = {}
    dirs = raw.get("dir") or {}
    if not isinstance(dirs, Mapping):
        raise ConfigError(f"{path}: 'dir' must be a mapping")
    _check_keys(path, "directory", dirs, _DIR_KEYS)
    for key, value in dirs.items():
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{path}: dir.{key} must be a non-empty string")
        kwargs[_DIR_KEYS[key]] = value

    if "passthrough_copy" in raw:
        paths = raw["passthrough_copy"]
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ConfigError(f"{path}: 'passthrough_copy' must be a list of paths")
        kwargs["passthrough_copy"] = paths

    excerpt_cfg = raw.get("excerpt") or {}
    if not isinstance(excerpt_cfg, Mapping):
        raise ConfigError(f"{path}: 'excerpt' must be a mapping")
    _check_keys(path, "excerpt", excerpt_cfg, {"separators"})
    if "separators" in excerpt_cfg:
        kwargs["excerpt_rules"] = build_rules(excerpt_cfg["separators"])

    return TemplatingConfig(**kwargs)

def build_environment(config: TemplatingConfig, loader: BaseLoader | None = None) -> Environment:
    env = Environment(
        loader=loader or FileSystemLoader(config.template_dirs()),
        autoescape=False,   # excerpts are already HTML
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["date_iso"] = date_iso
    env.filters["date_readable"] = date_readable
    excerpt = partial(extract_excerpt, rules=config.excerpt_rules)
    env.filters["excerpt"] = excerpt
    env.globals["excerpt"] = excerpt
    return env

def render_template(env: Environment, name: str, context: dict) -> str:
    return env.get_template(name).render(**context).strip() + "\n"
