"""
Pytest 配置和共享 fixtures
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date
from decimal import Decimal

from hms.database import Base, get_db
from hms.models import entities  # noqa
from hms.models.entities import (
    Role, RoleName, UserType, UserTypeName, User, Profile, RoomType, Room, RoomStatus
)
from hms.seeds.seed_data import seed_roles, seed_user_types, seed_configurations
from hms.security.auth import get_password_hash, create_access_token
from hms.main import app

DEFAULT_PASSWORD = "123456"


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 基础数据 Fixtures ==============

@pytest.fixture
def base_data(db_session):
    """角色、客户类型、系统配置"""
    seed_roles(db_session)
    seed_user_types(db_session)
    seed_configurations(db_session)
    db_session.commit()


@pytest.fixture
def make_user(db_session, base_data):
    """用户工厂：直接写库创建用户及档案"""
    def _make_user(email, role_name=RoleName.USER, type_name=UserTypeName.LOCAL,
                   full_name="测试用户", address="杭州市西湖区"):
        role = db_session.query(Role).filter(Role.role_name == role_name).first()
        user_type = db_session.query(UserType).filter(UserType.type_name == type_name).first()
        user = User(
            email=email,
            password=get_password_hash(DEFAULT_PASSWORD),
            role_id=role.id,
            user_type_id=user_type.id
        )
        user.profile = Profile(
            full_name=full_name,
            nationality="中国",
            dob=date(1990, 1, 1),
            phone_number="13800138000",
            address=address,
            identity_number=f"ID-{email}"
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


# ============== 认证相关 Fixtures ==============

@pytest.fixture
def admin_user(make_user):
    """管理员"""
    return make_user("admin@test.com", role_name=RoleName.ADMIN, full_name="管理员")


@pytest.fixture
def normal_user(make_user):
    """普通用户（本国客人）"""
    return make_user("guest@test.com", full_name="张三")


@pytest.fixture
def other_user(make_user):
    """另一个普通用户"""
    return make_user("other@test.com", full_name="李四", address="上海市黄浦区")


@pytest.fixture
def foreign_user(make_user):
    """外国客人"""
    return make_user("foreign@test.com", type_name=UserTypeName.FOREIGN, full_name="John Smith")


@pytest.fixture
def admin_token(admin_user):
    return create_access_token(admin_user.id, RoleName.ADMIN)


@pytest.fixture
def user_token(normal_user):
    return create_access_token(normal_user.id, RoleName.USER)


@pytest.fixture
def other_token(other_user):
    return create_access_token(other_user.id, RoleName.USER)


@pytest.fixture
def admin_headers(admin_token):
    """返回管理员认证的请求头"""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token):
    """返回普通用户认证的请求头"""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def other_headers(other_token):
    return {"Authorization": f"Bearer {other_token}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_room_type(db_session):
    """创建测试房型"""
    room_type = RoomType(
        name="标准间",
        description="Standard Room",
        room_price=Decimal("100.00")
    )
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_room_type_luxury(db_session):
    """创建豪华房型"""
    room_type = RoomType(
        name="豪华间",
        description="Luxury Room",
        room_price=Decimal("500.00")
    )
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_room(db_session, sample_room_type):
    """创建测试房间"""
    room = Room(
        room_number="101",
        room_type_id=sample_room_type.id,
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_room_102(db_session, sample_room_type):
    """创建102房间"""
    room = Room(
        room_number="102",
        room_type_id=sample_room_type.id,
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def luxury_room(db_session, sample_room_type_luxury):
    """创建豪华间房间"""
    room = Room(
        room_number="801",
        room_type_id=sample_room_type_luxury.id,
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room
