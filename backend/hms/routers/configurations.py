"""
系统配置路由
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.models.entities import User
from hms.models.schemas import ConfigurationUpdate, ConfigurationResponse
from hms.services.configuration_service import ConfigurationService
from hms.security.auth import get_current_user, require_admin

router = APIRouter(prefix="/configurations", tags=["系统配置"])


@router.get("", response_model=List[ConfigurationResponse])
def list_configurations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取所有配置"""
    return ConfigurationService(db).find_all()


@router.get("/{config_id}", response_model=ConfigurationResponse)
def get_configuration(
    config_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取配置项"""
    return ConfigurationService(db).find_one(config_id)


@router.patch("/{config_id}", response_model=ConfigurationResponse)
def update_configuration(
    config_id: str,
    data: ConfigurationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """更新配置值"""
    return ConfigurationService(db).update(config_id, data.config_value)
