from __future__ import annotations

from pathlib import Path
from typing import Dict

import yaml

from ..exceptions import ConfigError, InvalidConversionTableError
from .tables import ConversionTable


def load_conversion_tables(path: str | Path) -> Dict[str, ConversionTable]:
    """
    Read unit families from YAML::

        length:
          m: 1
          league: 4828.032
        energy:
          J: 1
          kWh: 3600000
    """
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping of unit families, got {type(data).__name__}")

    tables: Dict[str, ConversionTable] = {}
    for family, factors in data.items():
        if not isinstance(factors, dict):
            raise ConfigError(f"{path}: family '{family}' must map units to factors")
        try:
            tables[str(family)] = ConversionTable(str(family), factors)
        except InvalidConversionTableError as exc:
            raise ConfigError(f"{path}: {exc}") from exc
    return tables
