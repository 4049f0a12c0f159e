"""
Unit-тесты для загрузки YAML-правил отправителей через VendorConfigLoader.

ЦКП: Проверка, что оба конфига валидны, а битые конфиги дают VendorConfigurationError.
"""

import pytest
import yaml

from config.settings import VENDOR_CONFIG_DIR
from freight_parsing.domain.exceptions import VendorConfigurationError
from freight_parsing.vendors.config_loader import VendorConfigLoader
from freight_parsing.vendors.vendor_config import CargoConfig, DateTimeConfig, PriceConfig


def _raw(name):
    with open(VENDOR_CONFIG_DIR / f"{name}.yaml", "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write(directory, name, data):
    path = directory / f"{name}.yaml"
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


class TestBundledConfigs:
    """Конфиги, которые идут вместе с пакетом."""

    def test_available(self):
        assert VendorConfigLoader().available() == ["transalliance", "ziegler"]

    def test_transalliance(self):
        config = VendorConfigLoader().load("transalliance")

        assert config.name == "transalliance"
        assert config.numbers.decimal_separator == ","
        assert config.numbers.thousands_separator == " "
        assert config.location.sections["loading"].anchors == ["Loading"]
        assert config.location.introduced_by == "ON:"
        assert config.cargo.labeled_occurrence == "last"
        assert config.cargo.package_types["PAPER ROLLS"] == "other"
        assert config.address.kinds["delivery"].country == "FR"
        assert config.lowercase_attachment is True

    def test_ziegler(self):
        config = VendorConfigLoader().load("ziegler")

        assert config.location.sections["delivery"].anchors == ["Delivery", "Clearance"]
        assert config.location.sections["delivery"].multiple is True
        assert config.dates.match_mode == "fullmatch"
        assert config.cargo.strategies == ["counted"]
        assert config.reference.next_line is True
        assert config.lowercase_attachment is False

    def test_cached(self):
        """Повторная загрузка отдаёт тот же объект."""
        loader = VendorConfigLoader()
        assert loader.load("ziegler") is VendorConfigLoader().load("ziegler")

    def test_clear_cache(self):
        first = VendorConfigLoader().load("ziegler")
        VendorConfigLoader.clear_cache()
        assert VendorConfigLoader().load("ziegler") is not first


class TestBrokenConfigs:
    """Ошибки конфигурации не должны пролезать наружу сырыми."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(VendorConfigurationError) as exc_info:
            VendorConfigLoader(tmp_path).load("acme")
        assert exc_info.value.component == "VendorConfigLoader"

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "acme.yaml").write_text("name: [unclosed\n", encoding="utf-8")
        with pytest.raises(VendorConfigurationError) as exc_info:
            VendorConfigLoader(tmp_path).load("acme")
        assert isinstance(exc_info.value.original_error, yaml.YAMLError)

    def test_invalid_structure(self, tmp_path):
        data = _raw("ziegler")
        del data["location"]
        _write(tmp_path, "ziegler", data)
        with pytest.raises(VendorConfigurationError):
            VendorConfigLoader(tmp_path).load("ziegler")

    def test_name_mismatch(self, tmp_path):
        _write(tmp_path, "acme", _raw("ziegler"))
        with pytest.raises(VendorConfigurationError):
            VendorConfigLoader(tmp_path).load("acme")

    def test_missing_kind_defaults(self, tmp_path):
        """Для каждой секции нужны дефолты адреса."""
        data = _raw("ziegler")
        del data["address"]["kinds"]["delivery"]
        _write(tmp_path, "ziegler", data)
        with pytest.raises(VendorConfigurationError):
            VendorConfigLoader(tmp_path).load("ziegler")

    def test_copied_config_loads(self, tmp_path):
        _write(tmp_path, "ziegler", _raw("ziegler"))
        config = VendorConfigLoader(tmp_path).load("ziegler")
        assert config.display_name == VendorConfigLoader().load("ziegler").display_name


class TestFieldValidators:
    """Валидаторы отдельных блоков."""

    def test_unknown_package_type(self):
        with pytest.raises(ValueError):
            CargoConfig(package_types={"BARRELS": "barrel"})

    def test_counted_requires_pattern(self):
        with pytest.raises(ValueError):
            CargoConfig(strategies=["counted"])

    def test_labeled_pattern_requires_value_group(self):
        with pytest.raises(ValueError):
            CargoConfig(weight_pattern=r"Weight:\s*(\d+)")

    def test_price_requires_amount_group(self):
        with pytest.raises(ValueError):
            PriceConfig(label_pattern="Rate", value_pattern=r"(\d+)")

    def test_invalid_regex(self):
        with pytest.raises(ValueError):
            PriceConfig(label_pattern="Rate(")

    def test_time_pattern_groups(self):
        with pytest.raises(ValueError):
            DateTimeConfig(date_formats=["DD/MM/YY"], time_range_patterns=[r"(?P<h1>\d+)"])

    def test_date_formats_required(self):
        with pytest.raises(ValueError):
            DateTimeConfig(date_formats=[])
