"""
预订管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.models.entities import User
from hms.models.schemas import (
    BookingCreate, BookingUpdate, BookingDelete, BookingResponse
)
from hms.services.booking_service import BookingService
from hms.security.auth import get_current_user

router = APIRouter(prefix="/bookings", tags=["预订管理"])


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取预订列表"""
    return BookingService(db).find_all(current_user.id)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """创建预订"""
    return BookingService(db).create(data, current_user.id)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取预订详情"""
    return BookingService(db).find_one(booking_id, current_user.id)


@router.patch("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: str,
    data: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """修改预订明细"""
    return BookingService(db).handle_update(data, current_user.id, booking_id)


@router.delete("/{booking_id}", response_model=BookingResponse)
def delete_booking(
    booking_id: str,
    data: Optional[BookingDelete] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """取消预订，可只取消部分明细"""
    detail_ids = data.booking_detail_ids if data else None
    return BookingService(db).remove(booking_id, current_user.id, detail_ids)
