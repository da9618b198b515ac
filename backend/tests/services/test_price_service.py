"""
Tests for hms/services/price_service.py
房价 × 晚数 × 客户类型系数 × 人数附加
"""
import pytest
from datetime import date, timedelta
from decimal import Decimal

from hms.exceptions import BadRequestError
from hms.services.configuration_service import ConfigurationService, CUSTOMER_SURCHARGE_RATE
from hms.services.price_service import PriceService


START = date(2030, 1, 1)


class TestPriceService:

    def test_local_guest(self, db_session, normal_user, sample_room_type):
        price = PriceService(db_session).calculate_booking_detail_price(
            sample_room_type, normal_user.user_type, START, START + timedelta(days=2), 1
        )
        assert price == Decimal("200.00")

    def test_foreign_guest_factor(self, db_session, foreign_user, sample_room_type):
        price = PriceService(db_session).calculate_booking_detail_price(
            sample_room_type, foreign_user.user_type, START, START + timedelta(days=2), 1
        )
        assert price == Decimal("300.00")

    def test_below_threshold_no_surcharge(self, db_session, normal_user, sample_room_type):
        price = PriceService(db_session).calculate_booking_detail_price(
            sample_room_type, normal_user.user_type, START, START + timedelta(days=1), 2
        )
        assert price == Decimal("100.00")

    def test_surcharge_at_threshold(self, db_session, normal_user, sample_room_type):
        price = PriceService(db_session).calculate_booking_detail_price(
            sample_room_type, normal_user.user_type, START, START + timedelta(days=2), 3
        )
        assert price == Decimal("250.00")

    def test_surcharge_and_foreign_factor(self, db_session, foreign_user, sample_room_type):
        price = PriceService(db_session).calculate_booking_detail_price(
            sample_room_type, foreign_user.user_type, START, START + timedelta(days=1), 3
        )
        assert price == Decimal("187.50")

    def test_rate_follows_configuration(self, db_session, normal_user, sample_room_type):
        config_service = ConfigurationService(db_session)
        config = config_service.find_by_name(CUSTOMER_SURCHARGE_RATE)
        config_service.update(config.id, Decimal("0.10"))

        price = PriceService(db_session).calculate_booking_detail_price(
            sample_room_type, normal_user.user_type, START, START + timedelta(days=1), 3
        )
        assert price == Decimal("110.00")

    def test_rounding(self, db_session, normal_user, sample_room_type):
        sample_room_type.room_price = Decimal("33.33")
        db_session.commit()
        price = PriceService(db_session).calculate_booking_detail_price(
            sample_room_type, normal_user.user_type, START, START + timedelta(days=1), 3
        )
        # 33.33 × 1.25 = 41.6625
        assert price == Decimal("41.66")

    def test_invalid_dates(self, db_session, normal_user, sample_room_type):
        with pytest.raises(BadRequestError):
            PriceService(db_session).calculate_booking_detail_price(
                sample_room_type, normal_user.user_type, START, START, 1
            )

    def test_calculate_nights(self):
        assert PriceService.calculate_nights(START, START + timedelta(days=5)) == 5
