from consultations.db.models.admin import Admin
from consultations.db.models.booking import Booking, BookingStatus
from consultations.db.models.contact_message import ContactMessage, ContactStatus
from consultations.db.models.newsletter_subscriber import NewsletterSubscriber
from consultations.db.models.schedule_settings import SCHEDULE_SETTINGS_ID, ScheduleSettings

__all__ = [
    "Admin",
    "Booking",
    "BookingStatus",
    "ContactMessage",
    "ContactStatus",
    "NewsletterSubscriber",
    "SCHEDULE_SETTINGS_ID",
    "ScheduleSettings",
]
