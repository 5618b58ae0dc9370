"""Models module exporting all database models."""

from .booking import Booking, BookingStatus
from .catalog import Destination, Itinerary, Lodge, TourPackage
from .contact_message import ContactMessage, ContactMessageStatus
from .content import (
    AboutHighlight,
    AboutStat,
    ContactChannel,
    ContactQuickFact,
    FeatureCard,
    HeroSlide,
)
from .user import User

__all__ = [
    # Public submissions
    "Booking",
    "BookingStatus",
    "ContactMessage",
    "ContactMessageStatus",

    # Page sections
    "HeroSlide",
    "FeatureCard",
    "AboutStat",
    "AboutHighlight",
    "ContactChannel",
    "ContactQuickFact",

    # Catalogue
    "TourPackage",
    "Itinerary",
    "Destination",
    "Lodge",

    # Accounts
    "User",
]
