# Business Services
from hms.services.user_service import UserService
from hms.services.auth_service import AuthService
from hms.services.room_type_service import RoomTypeService
from hms.services.room_service import RoomService
from hms.services.configuration_service import ConfigurationService
from hms.services.price_service import PriceService
from hms.services.invoice_service import InvoiceService
from hms.services.booking_detail_service import BookingDetailService
from hms.services.booking_service import BookingService

__all__ = [
    'UserService', 'AuthService', 'RoomTypeService', 'RoomService',
    'ConfigurationService', 'PriceService', 'InvoiceService',
    'BookingDetailService', 'BookingService'
]
