"""
Tests for hms/services/invoice_service.py
"""
import pytest
from datetime import date, timedelta
from decimal import Decimal

from hms.exceptions import BadRequestError, ForbiddenError, NotFoundError
from hms.models.entities import Invoice, InvoiceStatus
from hms.models.schemas import BookingDetailCreate
from hms.services.booking_detail_service import BookingDetailService
from hms.services.invoice_service import InvoiceService


def _create_detail(db, user, room, start=1, nights=2):
    data = BookingDetailCreate(
        room_id=room.id,
        start_date=date.today() + timedelta(days=start),
        end_date=date.today() + timedelta(days=start + nights),
    )
    return BookingDetailService(db).create(data, user.id)


class TestBookingDetailInvoices:

    def test_calculate_price_by_ids(self, db_session, normal_user, sample_room, luxury_room):
        d1 = _create_detail(db_session, normal_user, sample_room)
        d2 = _create_detail(db_session, normal_user, luxury_room, nights=1)

        total = InvoiceService(db_session).calculate_price_by_booking_detail_ids([d1.id, d2.id])
        assert total == Decimal("700.00")

    def test_calculate_skips_deleted(self, db_session, normal_user, sample_room, luxury_room):
        d1 = _create_detail(db_session, normal_user, sample_room)
        d2 = _create_detail(db_session, normal_user, luxury_room, nights=1)
        svc = InvoiceService(db_session)

        assert svc.soft_delete_by_booking_detail_ids([d2.id]) == 1
        db_session.commit()
        assert svc.calculate_price_by_booking_detail_ids([d1.id, d2.id]) == Decimal("200.00")

    def test_calculate_empty(self, db_session):
        assert InvoiceService(db_session).calculate_price_by_booking_detail_ids([]) == Decimal("0")

    def test_update_follows_detail_price(self, db_session, normal_user, sample_room):
        detail = _create_detail(db_session, normal_user, sample_room)
        detail.total_price = Decimal("999.00")

        invoice = InvoiceService(db_session).update_for_booking_detail(detail)
        db_session.commit()
        assert invoice.total_price == Decimal("999.00")
        assert db_session.query(Invoice).count() == 1

    def test_update_paid_invoice_rejected(self, db_session, normal_user, sample_room):
        detail = _create_detail(db_session, normal_user, sample_room)
        InvoiceService(db_session).pay(detail.invoice.id, normal_user.id)

        with pytest.raises(BadRequestError):
            InvoiceService(db_session).update_for_booking_detail(detail)


class TestQueries:

    def test_find_all_own(self, db_session, normal_user, other_user, sample_room, sample_room_102):
        _create_detail(db_session, normal_user, sample_room)
        _create_detail(db_session, other_user, sample_room_102)
        svc = InvoiceService(db_session)

        assert len(svc.find_all(normal_user.id)) == 1
        assert len(svc.find_all(other_user.id)) == 1

    def test_find_all_admin(self, db_session, admin_user, normal_user, other_user, sample_room, sample_room_102):
        _create_detail(db_session, normal_user, sample_room)
        _create_detail(db_session, other_user, sample_room_102)

        assert len(InvoiceService(db_session).find_all(admin_user.id)) == 2

    def test_find_all_unknown_user(self, db_session, base_data):
        with pytest.raises(NotFoundError):
            InvoiceService(db_session).find_all("missing")

    def test_find_one(self, db_session, normal_user, other_user, sample_room):
        detail = _create_detail(db_session, normal_user, sample_room)
        invoice_id = detail.invoice.id
        svc = InvoiceService(db_session)

        assert svc.find_one(invoice_id, normal_user.id).total_price == Decimal("200.00")
        with pytest.raises(ForbiddenError):
            svc.find_one(invoice_id, other_user.id)
        with pytest.raises(NotFoundError):
            svc.find_one("missing", normal_user.id)


class TestPay:

    def test_pay(self, db_session, normal_user, sample_room):
        detail = _create_detail(db_session, normal_user, sample_room)

        invoice = InvoiceService(db_session).pay(detail.invoice.id, normal_user.id)
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_at is not None

    def test_pay_twice(self, db_session, normal_user, sample_room):
        detail = _create_detail(db_session, normal_user, sample_room)
        svc = InvoiceService(db_session)
        svc.pay(detail.invoice.id, normal_user.id)

        with pytest.raises(BadRequestError, match="已支付"):
            svc.pay(detail.invoice.id, normal_user.id)

    def test_pay_other_users_invoice(self, db_session, normal_user, other_user, sample_room):
        detail = _create_detail(db_session, normal_user, sample_room)
        with pytest.raises(ForbiddenError):
            InvoiceService(db_session).pay(detail.invoice.id, other_user.id)
