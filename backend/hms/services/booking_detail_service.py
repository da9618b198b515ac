"""
预订明细服务
一条明细 = 一间房 + 一段日期。创建/修改时校验房间、日期、人数与档期冲突，
计算价格并同步发票与房间状态
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional
import logging
from sqlalchemy.orm import Session, joinedload
from hms.exceptions import BadRequestError, ForbiddenError, NotFoundError
from hms.models.entities import (
    Booking, BookingDetail, Room, RoomStatus, User
)
from hms.models.schemas import BookingDetailCreate, BookingDetailUpdate
from hms.services.configuration_service import ConfigurationService, MAX_CUSTOMERS_PER_ROOM
from hms.services.invoice_service import InvoiceService, serialize_invoice
from hms.services.price_service import PriceService
from hms.services.user_service import UserService

logger = logging.getLogger(__name__)

DEFAULT_MAX_CUSTOMERS = Decimal("3")


def serialize_booking_detail(detail: BookingDetail) -> dict:
    return {
        'id': detail.id,
        'booking_id': detail.booking_id,
        'user_id': detail.user_id,
        'room_id': detail.room_id,
        'room_number': detail.room.room_number if detail.room else None,
        'start_date': detail.start_date,
        'end_date': detail.end_date,
        'number_of_customers': detail.number_of_customers,
        'total_price': detail.total_price,
        'invoice': serialize_invoice(detail.invoice),
        'created_at': detail.created_at,
    }


class BookingDetailService:
    """预订明细服务"""

    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)
        self.config_service = ConfigurationService(db)
        self.price_service = PriceService(db)
        self.invoice_service = InvoiceService(db)

    def _query(self):
        return self.db.query(BookingDetail).options(
            joinedload(BookingDetail.room),
            joinedload(BookingDetail.invoice)
        ).filter(BookingDetail.deleted_at.is_(None))

    def _get_user(self, user_id: str) -> User:
        user = self.user_service.get_user_by_field('id', user_id)
        if not user:
            raise NotFoundError("用户不存在")
        return user

    def _get_bookable_room(self, room_id: str) -> Room:
        room = self.db.query(Room).options(joinedload(Room.room_type)).filter(
            Room.id == room_id,
            Room.deleted_at.is_(None)
        ).first()
        if not room:
            raise NotFoundError("房间不存在")
        if room.status == RoomStatus.MAINTENANCE:
            raise BadRequestError(f"房间 {room.room_number} 维修中，无法预订")
        return room

    def _validate_dates(self, start_date: date, end_date: date, check_past: bool = True) -> None:
        if end_date <= start_date:
            raise BadRequestError("退房日期必须晚于入住日期")
        if check_past and start_date < date.today():
            raise BadRequestError("入住日期不能早于今天")

    def _validate_customers(self, number_of_customers: int) -> None:
        max_customers = self.config_service.get_value(MAX_CUSTOMERS_PER_ROOM, DEFAULT_MAX_CUSTOMERS)
        if number_of_customers < 1 or number_of_customers > max_customers:
            raise BadRequestError(f"入住人数必须在 1 到 {int(max_customers)} 之间")

    def _check_availability(
        self,
        room: Room,
        start_date: date,
        end_date: date,
        exclude_detail_id: Optional[str] = None
    ) -> None:
        """同一房间的有效明细日期不能重叠，退房日当天可再入住"""
        query = self.db.query(BookingDetail).filter(
            BookingDetail.room_id == room.id,
            BookingDetail.deleted_at.is_(None),
            BookingDetail.start_date < end_date,
            BookingDetail.end_date > start_date
        )
        if exclude_detail_id:
            query = query.filter(BookingDetail.id != exclude_detail_id)

        if query.first():
            logger.warning(f"房间 {room.room_number} 在 {start_date} ~ {end_date} 已被预订")
            raise BadRequestError(f"房间 {room.room_number} 在该时间段已被预订")

    def _release_room_if_idle(self, room_id: str) -> None:
        """房间没有有效明细时恢复为可预订"""
        remaining = self.db.query(BookingDetail).filter(
            BookingDetail.room_id == room_id,
            BookingDetail.deleted_at.is_(None)
        ).count()
        if remaining:
            return

        room = self.db.query(Room).filter(Room.id == room_id).first()
        if room and room.status == RoomStatus.BOOKED:
            room.status = RoomStatus.AVAILABLE
            logger.info(f"房间 {room.room_number} 已释放")

    def create(self, data: BookingDetailCreate, user_id: str, commit: bool = True) -> BookingDetail:
        """创建预订明细并开具发票"""
        user = self._get_user(user_id)
        room = self._get_bookable_room(data.room_id)
        self._validate_dates(data.start_date, data.end_date)
        self._validate_customers(data.number_of_customers)
        self._check_availability(room, data.start_date, data.end_date)

        total_price = self.price_service.calculate_booking_detail_price(
            room.room_type, user.user_type,
            data.start_date, data.end_date, data.number_of_customers
        )

        detail = BookingDetail(
            user_id=user_id,
            room_id=room.id,
            start_date=data.start_date,
            end_date=data.end_date,
            number_of_customers=data.number_of_customers,
            total_price=total_price
        )
        self.db.add(detail)
        self.db.flush()

        self.invoice_service.create_for_booking_detail(detail)
        room.status = RoomStatus.BOOKED
        self.db.flush()

        if commit:
            self.db.commit()
            self.db.refresh(detail)

        logger.info(
            f"预订明细已创建: {detail.id} 房间 {room.room_number} "
            f"{data.start_date} ~ {data.end_date} 金额 {total_price}"
        )
        return detail

    def update_one(self, data: BookingDetailUpdate, user_id: str, commit: bool = True) -> BookingDetail:
        """修改预订明细并重新计价"""
        detail = self._query().filter(BookingDetail.id == data.id).first()
        if not detail:
            raise NotFoundError("预订明细不存在")

        user = self._get_user(user_id)
        if detail.user_id != user_id and not user.is_admin:
            raise ForbiddenError("无权修改该预订明细")

        update_data = data.model_dump(exclude_unset=True, exclude={'id'})
        if not update_data:
            return detail

        old_room_id = detail.room_id
        room = detail.room
        if 'room_id' in update_data and update_data['room_id'] != old_room_id:
            room = self._get_bookable_room(update_data['room_id'])
        elif room.status == RoomStatus.MAINTENANCE:
            raise BadRequestError(f"房间 {room.room_number} 维修中，无法修改预订")

        start_date = update_data.get('start_date', detail.start_date)
        end_date = update_data.get('end_date', detail.end_date)
        number_of_customers = update_data.get('number_of_customers', detail.number_of_customers)

        self._validate_dates(start_date, end_date, check_past='start_date' in update_data)
        self._validate_customers(number_of_customers)
        self._check_availability(room, start_date, end_date, exclude_detail_id=detail.id)

        owner = detail.user if detail.user_id != user_id else user
        total_price = self.price_service.calculate_booking_detail_price(
            room.room_type, owner.user_type,
            start_date, end_date, number_of_customers
        )

        detail.room_id = room.id
        detail.room = room
        detail.start_date = start_date
        detail.end_date = end_date
        detail.number_of_customers = number_of_customers
        detail.total_price = total_price

        self.invoice_service.update_for_booking_detail(detail)

        if room.status == RoomStatus.AVAILABLE:
            room.status = RoomStatus.BOOKED
        self.db.flush()
        if room.id != old_room_id:
            self._release_room_if_idle(old_room_id)
            self.db.flush()

        if commit:
            self.db.commit()
            self.db.refresh(detail)

        logger.info(f"预订明细已更新: {detail.id} 金额 {total_price}")
        return detail

    def find_all(self, user_id: str) -> List[BookingDetail]:
        """获取预订明细，管理员可见全部"""
        user = self._get_user(user_id)

        query = self._query()
        if not user.is_admin:
            query = query.filter(BookingDetail.user_id == user_id)
        return query.order_by(BookingDetail.start_date).all()

    def find_one(self, detail_id: str, user_id: str) -> BookingDetail:
        """获取单条预订明细"""
        user = self._get_user(user_id)

        detail = self._query().filter(BookingDetail.id == detail_id).first()
        if not detail:
            raise NotFoundError("预订明细不存在")
        if detail.user_id != user_id and not user.is_admin:
            raise ForbiddenError("无权查看该预订明细")
        return detail

    def handle_soft_delete(self, booking_detail_ids: List[str], commit: bool = True) -> int:
        """软删除明细及其发票，空闲房间恢复可预订"""
        if not booking_detail_ids:
            return 0

        details = self.db.query(BookingDetail).filter(
            BookingDetail.id.in_(booking_detail_ids),
            BookingDetail.deleted_at.is_(None)
        ).all()

        room_ids = set()
        for detail in details:
            detail.soft_delete()
            room_ids.add(detail.room_id)
        self.db.flush()

        self.invoice_service.soft_delete_by_booking_detail_ids([d.id for d in details])

        for room_id in room_ids:
            self._release_room_if_idle(room_id)
        self.db.flush()

        if commit:
            self.db.commit()

        logger.info(f"预订明细已删除: {len(details)} 条")
        return len(details)

    def assign_to_booking(self, details: List[BookingDetail], booking: Booking) -> None:
        """将明细归入预订"""
        for detail in details:
            detail.booking = booking
        self.db.flush()
