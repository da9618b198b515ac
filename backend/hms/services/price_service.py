"""
价格服务
预订明细价格 = 房价 × 晚数 × 客户类型系数 × (1 + 附加费率，入住人数达到阈值时)
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
import logging
from sqlalchemy.orm import Session
from hms.exceptions import BadRequestError
from hms.models.entities import RoomType, UserType
from hms.services.configuration_service import (
    ConfigurationService, CUSTOMER_SURCHARGE_THRESHOLD, CUSTOMER_SURCHARGE_RATE
)

logger = logging.getLogger(__name__)

DEFAULT_SURCHARGE_THRESHOLD = Decimal("3")
DEFAULT_SURCHARGE_RATE = Decimal("0.25")
CENT = Decimal("0.01")


class PriceService:
    """价格服务"""

    def __init__(self, db: Session):
        self.db = db
        self.config_service = ConfigurationService(db)

    @staticmethod
    def calculate_nights(start_date: date, end_date: date) -> int:
        """计算入住晚数"""
        nights = (end_date - start_date).days
        if nights < 1:
            raise BadRequestError("退房日期必须晚于入住日期")
        return nights

    def get_customer_multiplier(self, number_of_customers: int) -> Decimal:
        """入住人数附加系数"""
        threshold = self.config_service.get_value(
            CUSTOMER_SURCHARGE_THRESHOLD, DEFAULT_SURCHARGE_THRESHOLD
        )
        rate = self.config_service.get_value(
            CUSTOMER_SURCHARGE_RATE, DEFAULT_SURCHARGE_RATE
        )
        if number_of_customers >= threshold:
            return Decimal("1") + rate
        return Decimal("1")

    def calculate_booking_detail_price(
        self,
        room_type: RoomType,
        user_type: UserType,
        start_date: date,
        end_date: date,
        number_of_customers: int
    ) -> Decimal:
        """计算预订明细总价"""
        nights = self.calculate_nights(start_date, end_date)
        room_price = Decimal(str(room_type.room_price))
        factor = Decimal(str(user_type.surcharge_factor)) if user_type else Decimal("1")

        total = room_price * nights * factor * self.get_customer_multiplier(number_of_customers)
        total = total.quantize(CENT, rounding=ROUND_HALF_UP)

        logger.debug(
            f"价格计算: {room_type.name} {nights}晚 系数{factor} "
            f"{number_of_customers}人 -> {total}"
        )
        return total
