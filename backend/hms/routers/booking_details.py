"""
预订明细路由
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.models.entities import User
from hms.models.schemas import BookingDetailResponse
from hms.services.booking_detail_service import BookingDetailService, serialize_booking_detail
from hms.security.auth import get_current_user

router = APIRouter(prefix="/booking-details", tags=["预订明细"])


@router.get("", response_model=List[BookingDetailResponse])
def list_booking_details(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取预订明细列表"""
    details = BookingDetailService(db).find_all(current_user.id)
    return [serialize_booking_detail(d) for d in details]


@router.get("/{detail_id}", response_model=BookingDetailResponse)
def get_booking_detail(
    detail_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取预订明细"""
    return serialize_booking_detail(BookingDetailService(db).find_one(detail_id, current_user.id))
