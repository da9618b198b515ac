"""
Tests for hms/services/configuration_service.py
"""
import pytest
from decimal import Decimal

from hms.exceptions import BadRequestError, NotFoundError
from hms.services.configuration_service import (
    ConfigurationService, MAX_CUSTOMERS_PER_ROOM, CUSTOMER_SURCHARGE_RATE
)


class TestConfigurationService:

    def test_find_all(self, db_session, base_data):
        configs = ConfigurationService(db_session).find_all()
        assert len(configs) == 3

    def test_find_by_name(self, db_session, base_data):
        config = ConfigurationService(db_session).find_by_name(MAX_CUSTOMERS_PER_ROOM)
        assert config.config_value == Decimal("3")

    def test_find_by_name_missing(self, db_session, base_data):
        with pytest.raises(NotFoundError):
            ConfigurationService(db_session).find_by_name("unknown")

    def test_find_one_missing(self, db_session, base_data):
        with pytest.raises(NotFoundError):
            ConfigurationService(db_session).find_one("missing")

    def test_update(self, db_session, base_data):
        svc = ConfigurationService(db_session)
        config = svc.find_by_name(CUSTOMER_SURCHARGE_RATE)

        updated = svc.update(config.id, Decimal("0.5"))
        assert updated.config_value == Decimal("0.5")
        assert svc.get_value(CUSTOMER_SURCHARGE_RATE) == Decimal("0.5")

    def test_update_accepts_numeric_string(self, db_session, base_data):
        svc = ConfigurationService(db_session)
        config = svc.find_by_name(MAX_CUSTOMERS_PER_ROOM)
        assert svc.update(config.id, "4").config_value == Decimal("4")

    def test_update_rejects_negative(self, db_session, base_data):
        svc = ConfigurationService(db_session)
        config = svc.find_by_name(MAX_CUSTOMERS_PER_ROOM)
        with pytest.raises(BadRequestError):
            svc.update(config.id, -1)

    def test_update_rejects_non_number(self, db_session, base_data):
        svc = ConfigurationService(db_session)
        config = svc.find_by_name(MAX_CUSTOMERS_PER_ROOM)
        with pytest.raises(BadRequestError):
            svc.update(config.id, "abc")

    def test_get_value_default(self, db_session):
        assert ConfigurationService(db_session).get_value("unknown", Decimal("7")) == Decimal("7")
        assert ConfigurationService(db_session).get_value("unknown") is None
