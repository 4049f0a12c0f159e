"""
Настройки проекта Freight Order Parsing.

Все пороги и окна сканирования собраны здесь.
Правила конкретных отправителей (якоря, метки, таблицы) лежат в YAML:
freight_parsing/vendors/configs/<vendor>.yaml
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
VENDOR_CONFIG_DIR = PROJECT_ROOT / "freight_parsing" / "vendors" / "configs"

# =============================================================================
# ЛОГИРОВАНИЕ (используется только скриптами, библиотека не настраивает sink)
# =============================================================================
LOG_LEVEL = os.getenv("FREIGHT_PARSING_LOG_LEVEL", "INFO")

# =============================================================================
# НАСТРОЙКИ СКАНИРОВАНИЯ СЕКЦИЙ
# =============================================================================
# Сколько строк после якоря секции просматривать
LOCATION_SCAN_WINDOW = 15

# Сколько строк внутри окна реально классифицировать
LOCATION_MAX_LINES = 10

# Сколько строк адреса собирать после названия компании
LOCATION_MAX_ADDRESS_LINES = 4

# Разделитель строк адреса при склейке
ADDRESS_SEPARATOR = ", "

# =============================================================================
# НАСТРОЙКИ АДРЕСОВ
# =============================================================================
# Город короче этого значения считается мусором и заменяется дефолтом
MIN_CITY_LENGTH = 2

# Город по умолчанию, если у отправителя нет своего
DEFAULT_CITY = "Unknown"

# =============================================================================
# НАСТРОЙКИ ГРУЗА
# =============================================================================
# FTL если вес СТРОГО больше порога (кг)
FTL_WEIGHT_THRESHOLD_KG = 10000

# FTL если количество мест СТРОГО больше порога (только счётная стратегия)
FTL_PACKAGE_COUNT_THRESHOLD = 10

# Строки с метками груза, разделённые не более чем этим числом строк, - один блок
CARGO_BLOCK_MAX_GAP = 2

DEFAULT_CARGO_TITLE = "General cargo"

# =============================================================================
# НАСТРОЙКИ ЦЕНЫ
# =============================================================================
DEFAULT_CURRENCY = "EUR"

# Символы валют → ISO 4217
CURRENCY_SYMBOLS = {
    "€": "EUR",
    "£": "GBP",
    "$": "USD",
}

# Коды валют, которые распознаются как токен рядом с ценой
KNOWN_CURRENCY_CODES = ["EUR", "GBP", "USD", "CHF", "PLN", "CZK", "HUF", "RON", "SEK", "DKK", "NOK"]
