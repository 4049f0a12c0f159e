"""
Резолвер стран: название / алиас / ISO-код → ISO 3166-1 alpha-2.

Дефолтная реализация ICountryResolver на таблице countries.yaml.
В проде может быть заменена внешним справочником с тем же интерфейсом.
"""

from pathlib import Path
from typing import ClassVar, Dict, Optional

import yaml
from loguru import logger

from config.settings import VENDOR_CONFIG_DIR
from ..domain.exceptions import VendorConfigurationError
from ..domain.interfaces import ICountryResolver


class StaticCountryResolver(ICountryResolver):
    """
    Регистронезависимый поиск по таблице алиасов.

    Распознаёт:
    - alpha-2 коды из таблицы (GB, FR)
    - alpha-3 коды и названия (GBR, FRANCE)
    - разговорные алиасы (UK → GB)
    """

    _tables: ClassVar[Dict[str, Dict[str, str]]] = {}

    def __init__(self, table_path: Optional[Path] = None):
        self.table_path = Path(table_path) if table_path is not None else VENDOR_CONFIG_DIR / "countries.yaml"
        self._lookup = self._load(self.table_path)

    @classmethod
    def _load(cls, path: Path) -> Dict[str, str]:
        key = str(path)
        if key in cls._tables:
            return cls._tables[key]

        if not path.exists():
            raise VendorConfigurationError(
                f"Таблица стран не найдена: {path}", component="CountryResolver"
            )

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        lookup: Dict[str, str] = {}
        for code, aliases in (data.get("countries") or {}).items():
            code = str(code).upper()
            lookup[code] = code
            for alias in aliases or []:
                lookup[str(alias).strip().upper()] = code

        cls._tables[key] = lookup
        logger.debug(f"[CountryResolver] Загружено {len(lookup)} алиасов стран из {path.name}")
        return lookup

    def resolve(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        code = self._lookup.get(token.strip().strip(".,-").upper())
        logger.trace(f"[CountryResolver] {token!r} → {code}")
        return code
