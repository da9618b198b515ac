"""
发票路由
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.models.entities import User
from hms.models.schemas import InvoiceResponse
from hms.services.invoice_service import InvoiceService
from hms.security.auth import get_current_user

router = APIRouter(prefix="/invoices", tags=["发票管理"])


@router.get("", response_model=List[InvoiceResponse])
def list_invoices(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取发票列表"""
    return InvoiceService(db).find_all(current_user.id)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    invoice_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取发票详情"""
    return InvoiceService(db).find_one(invoice_id, current_user.id)


@router.post("/{invoice_id}/pay", response_model=InvoiceResponse)
def pay_invoice(
    invoice_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """支付发票"""
    return InvoiceService(db).pay(invoice_id, current_user.id)
