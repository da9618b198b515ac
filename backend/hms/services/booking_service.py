"""
预订服务 - 聚合根操作
Booking.total_price 始终与有效明细的发票金额之和保持一致。
create / handle_update / remove 为多行写入，失败时整体回滚
"""
from typing import List, Optional
import logging
from sqlalchemy.orm import Session, joinedload, selectinload
from hms.exceptions import BadRequestError, ForbiddenError, NotFoundError
from hms.models.entities import Booking, BookingDetail, User
from hms.models.schemas import BookingCreate, BookingUpdate
from hms.services.booking_detail_service import BookingDetailService, serialize_booking_detail
from hms.services.invoice_service import InvoiceService
from hms.services.user_service import UserService, serialize_profile

logger = logging.getLogger(__name__)


def serialize_booking(booking: Booking, include_user: bool = True) -> dict:
    data = {
        'id': booking.id,
        'total_price': booking.total_price,
        'created_at': booking.created_at,
        'deleted_at': booking.deleted_at,
        'booking_details': [
            serialize_booking_detail(d)
            for d in sorted(booking.active_booking_details, key=lambda d: d.start_date)
        ],
    }
    if include_user and booking.user is not None:
        data['user'] = {
            'id': booking.user.id,
            'email': booking.user.email,
            'profile': serialize_profile(booking.user.profile),
        }
    return data


class BookingService:
    """预订服务"""

    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)
        self.detail_service = BookingDetailService(db)
        self.invoice_service = InvoiceService(db)

    def _query(self):
        return self.db.query(Booking).options(
            joinedload(Booking.user).joinedload(User.profile),
            selectinload(Booking.booking_details).joinedload(BookingDetail.room),
            selectinload(Booking.booking_details).joinedload(BookingDetail.invoice)
        ).filter(Booking.deleted_at.is_(None))

    def _get_user(self, user_id: str) -> User:
        user = self.user_service.get_user_by_field('id', user_id)
        if not user:
            raise NotFoundError("用户不存在")
        return user

    def _get_owned_booking(self, booking_id: str, user: User) -> Booking:
        booking = self._query().filter(Booking.id == booking_id).first()
        if not booking:
            raise NotFoundError("预订不存在")
        if booking.user_id != user.id and not user.is_admin:
            logger.warning(f"用户 {user.id} 尝试访问预订 {booking_id}")
            raise ForbiddenError("无权操作该预订")
        return booking

    def _recalculate_total(self, booking: Booking) -> None:
        detail_ids = [d.id for d in booking.active_booking_details]
        booking.total_price = self.invoice_service.calculate_price_by_booking_detail_ids(detail_ids)

    def find_all(self, user_id: str) -> List[dict]:
        """获取预订列表，管理员可见全部并附带用户信息"""
        user = self._get_user(user_id)

        query = self._query()
        if not user.is_admin:
            query = query.filter(Booking.user_id == user_id)

        bookings = query.order_by(Booking.created_at.desc()).all()
        return [serialize_booking(b, include_user=user.is_admin) for b in bookings]

    def find_one(self, booking_id: str, user_id: str) -> dict:
        """获取单个预订"""
        user = self._get_user(user_id)
        return serialize_booking(self._get_owned_booking(booking_id, user))

    def create(self, data: BookingCreate, user_id: str) -> dict:
        """创建预订及其全部明细"""
        self._get_user(user_id)

        try:
            booking = Booking(user_id=user_id, total_price=0)
            self.db.add(booking)
            self.db.flush()

            details = [
                self.detail_service.create(item, user_id, commit=False)
                for item in data.booking_details
            ]
            self.detail_service.assign_to_booking(details, booking)
            booking.total_price = sum(d.total_price for d in details)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        logger.info(f"预订已创建: {booking.id} 明细 {len(details)} 条 总价 {booking.total_price}")
        return serialize_booking(booking)

    def handle_update(self, data: BookingUpdate, user_id: str, booking_id: str) -> dict:
        """修改预订明细并重新汇总总价"""
        user = self._get_user(user_id)
        booking = self._get_owned_booking(booking_id, user)

        detail_ids = {d.id for d in booking.active_booking_details}
        for item in data.booking_details:
            if item.id not in detail_ids:
                raise BadRequestError(f"预订明细 {item.id} 不属于该预订")

        try:
            for item in data.booking_details:
                self.detail_service.update_one(item, user_id, commit=False)
            self._recalculate_total(booking)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        logger.info(f"预订已更新: {booking_id} 总价 {booking.total_price}")
        return serialize_booking(booking)

    def remove(self, booking_id: str, user_id: str, booking_detail_ids: Optional[List[str]] = None) -> dict:
        """
        删除预订或其部分明细
        未指定明细或明细全部删除时，预订本身一并软删除
        """
        user = self._get_user(user_id)
        booking = self._get_owned_booking(booking_id, user)

        live_ids = [d.id for d in booking.active_booking_details]
        if booking_detail_ids:
            for detail_id in booking_detail_ids:
                if detail_id not in live_ids:
                    raise BadRequestError(f"预订明细 {detail_id} 不属于该预订")
            target_ids = list(booking_detail_ids)
        else:
            target_ids = live_ids

        try:
            self.detail_service.handle_soft_delete(target_ids, commit=False)

            if not booking_detail_ids or not booking.active_booking_details:
                booking.soft_delete()
                logger.info(f"预订已删除: {booking_id}")
            else:
                self._recalculate_total(booking)
                logger.info(f"预订 {booking_id} 删除明细 {len(target_ids)} 条，总价 {booking.total_price}")

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        return serialize_booking(booking)
