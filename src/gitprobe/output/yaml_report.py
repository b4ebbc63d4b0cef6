"""YAML reporter for result and error records."""

from __future__ import annotations

from typing import Any, Dict

import yaml


class _BlockDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings (diffs, bodies) as ``|`` blocks."""


def _str_representer(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    style = "|" if "\n" in value else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style=style)


_BlockDumper.add_representer(str, _str_representer)


def render(record: Dict[str, Any]) -> str:
    return yaml.dump(
        record,
        Dumper=_BlockDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
