from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple

from homemadefood.domain.models import Booking, BookingServiceItem

class IBookingRepository(ABC):
    @abstractmethod
    def create_with_services(self, booking: Booking, services: List[BookingServiceItem]) -> Booking:
        pass

    @abstractmethod
    def get(self, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    def search(self, on_date: Optional[date], phone: Optional[str], status: Optional[str],
               offset: int, limit: int) -> Tuple[List[Booking], int]:
        pass

    @abstractmethod
    def save(self, booking: Booking, replace_services: Optional[List[BookingServiceItem]] = None) -> Booking:
        pass
