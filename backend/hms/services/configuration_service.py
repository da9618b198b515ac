"""
系统配置服务
业务参数保存在 configurations 表中，按名称读取
"""
from decimal import Decimal, InvalidOperation
from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from hms.exceptions import BadRequestError, NotFoundError
from hms.models.entities import Configuration

logger = logging.getLogger(__name__)

# 配置项名称
MAX_CUSTOMERS_PER_ROOM = "max_customers_per_room"
CUSTOMER_SURCHARGE_THRESHOLD = "customer_surcharge_threshold"
CUSTOMER_SURCHARGE_RATE = "customer_surcharge_rate"


class ConfigurationService:
    """系统配置服务"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Configuration).filter(Configuration.deleted_at.is_(None))

    def find_all(self) -> List[Configuration]:
        """获取所有配置"""
        return self._query().order_by(Configuration.config_name).all()

    def find_one(self, config_id: str) -> Configuration:
        """获取单个配置"""
        config = self._query().filter(Configuration.id == config_id).first()
        if not config:
            raise NotFoundError("配置项不存在")
        return config

    def find_by_name(self, config_name: str) -> Configuration:
        """根据名称获取配置"""
        config = self._query().filter(Configuration.config_name == config_name).first()
        if not config:
            raise NotFoundError(f"配置项 '{config_name}' 不存在")
        return config

    def update(self, config_id: str, config_value) -> Configuration:
        """更新配置值，必须为非负数"""
        config = self.find_one(config_id)

        try:
            value = Decimal(str(config_value))
        except (InvalidOperation, ValueError):
            raise BadRequestError("配置值必须为数字")
        if not value.is_finite() or value < 0:
            raise BadRequestError("配置值必须为非负数")

        old_value = config.config_value
        config.config_value = value
        self.db.commit()
        self.db.refresh(config)

        logger.info(f"配置已更新: {config.config_name} {old_value} -> {value}")
        return config

    def get_value(self, config_name: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
        """读取配置值，不存在时返回默认值"""
        config = self._query().filter(Configuration.config_name == config_name).first()
        if config is None:
            return default
        return Decimal(str(config.config_value))
