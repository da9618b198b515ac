# ORM Entities
from hms.models.entities import (
    Role, UserType, User, Profile, RoomType, Room,
    Booking, BookingDetail, Invoice, Configuration
)

__all__ = [
    'Role', 'UserType', 'User', 'Profile', 'RoomType', 'Room',
    'Booking', 'BookingDetail', 'Invoice', 'Configuration'
]
