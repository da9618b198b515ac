"""
发票服务
每条预订明细对应一张发票，发票金额即明细价格。
create/update/soft_delete 仅 flush，由调用方统一提交
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import logging
from sqlalchemy.orm import Session, joinedload
from hms.exceptions import BadRequestError, ForbiddenError, NotFoundError
from hms.models.entities import BookingDetail, Invoice, InvoiceStatus, User

logger = logging.getLogger(__name__)


def serialize_invoice(invoice: Optional[Invoice]) -> Optional[dict]:
    if invoice is None or invoice.is_deleted:
        return None
    return {
        'id': invoice.id,
        'booking_detail_id': invoice.booking_detail_id,
        'total_price': invoice.total_price,
        'status': invoice.status,
        'paid_at': invoice.paid_at,
        'created_at': invoice.created_at,
    }


class InvoiceService:
    """发票服务"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Invoice).options(
            joinedload(Invoice.booking_detail)
        ).filter(Invoice.deleted_at.is_(None))

    def _get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(
            User.id == user_id,
            User.deleted_at.is_(None)
        ).first()
        if not user:
            raise NotFoundError("用户不存在")
        return user

    def create_for_booking_detail(self, detail: BookingDetail) -> Invoice:
        """为预订明细开具发票"""
        invoice = Invoice(
            booking_detail_id=detail.id,
            total_price=detail.total_price,
            status=InvoiceStatus.UNPAID
        )
        detail.invoice = invoice
        self.db.add(invoice)
        self.db.flush()

        logger.info(f"发票已创建: {invoice.id} 明细 {detail.id} 金额 {invoice.total_price}")
        return invoice

    def update_for_booking_detail(self, detail: BookingDetail) -> Invoice:
        """按明细当前价格更新发票，已支付发票不可改价"""
        invoice = detail.invoice
        if invoice is None or invoice.is_deleted:
            return self.create_for_booking_detail(detail)

        if invoice.status == InvoiceStatus.PAID:
            logger.warning(f"发票 {invoice.id} 已支付，拒绝改价")
            raise BadRequestError("发票已支付，无法修改预订")

        invoice.total_price = detail.total_price
        self.db.flush()
        return invoice

    def calculate_price_by_booking_detail_ids(self, booking_detail_ids: List[str]) -> Decimal:
        """汇总有效发票金额"""
        if not booking_detail_ids:
            return Decimal("0.00")

        invoices = self.db.query(Invoice).filter(
            Invoice.booking_detail_id.in_(booking_detail_ids),
            Invoice.deleted_at.is_(None)
        ).all()
        return sum((Decimal(str(inv.total_price)) for inv in invoices), Decimal("0.00"))

    def soft_delete_by_booking_detail_ids(self, booking_detail_ids: List[str]) -> int:
        """软删除明细对应的发票"""
        if not booking_detail_ids:
            return 0

        invoices = self.db.query(Invoice).filter(
            Invoice.booking_detail_id.in_(booking_detail_ids),
            Invoice.deleted_at.is_(None)
        ).all()
        for invoice in invoices:
            invoice.soft_delete()
        self.db.flush()
        return len(invoices)

    def find_all(self, user_id: str) -> List[Invoice]:
        """获取发票列表，管理员可见全部"""
        user = self._get_user(user_id)

        query = self._query().join(Invoice.booking_detail).filter(
            BookingDetail.deleted_at.is_(None)
        )
        if not user.is_admin:
            query = query.filter(BookingDetail.user_id == user_id)

        return query.order_by(Invoice.created_at.desc()).all()

    def find_one(self, invoice_id: str, user_id: str) -> Invoice:
        """获取单张发票"""
        user = self._get_user(user_id)

        invoice = self._query().filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise NotFoundError("发票不存在")

        if invoice.booking_detail.user_id != user_id and not user.is_admin:
            raise ForbiddenError("无权查看该发票")
        return invoice

    def pay(self, invoice_id: str, user_id: str) -> Invoice:
        """支付发票"""
        invoice = self.find_one(invoice_id, user_id)

        if invoice.status == InvoiceStatus.PAID:
            raise BadRequestError("发票已支付")

        invoice.status = InvoiceStatus.PAID
        invoice.paid_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(invoice)

        logger.info(f"发票已支付: {invoice_id}")
        return invoice
