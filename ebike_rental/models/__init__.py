"""Expose ORM models."""
from .bike import Bike, MaintenanceRecord
from .booking import Booking, BookingBike
from .fixed_cost import FixedCost
from .server_config import ServerConfig
from .shop_settings import ShopSettings

__all__ = [
    "Bike",
    "Booking",
    "BookingBike",
    "FixedCost",
    "MaintenanceRecord",
    "ServerConfig",
    "ShopSettings",
]
