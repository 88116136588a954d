"""Fixed field schema for customer settings.

Each category maps wire keys (camelCase) to a FieldSpec describing the
value type, the accepted choices or bounds, and how the view renders it.
Both update validation and page rendering read from this table.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ...core.config import settings

TOGGLE = "toggle"
NUMBER = "number"
SELECT = "select"
READONLY = "readonly"


@dataclass(frozen=True)
class FieldSpec:
    attr: str
    label: str
    kind: type
    control: str
    description: Optional[str] = None
    choices: Tuple[Tuple[str, str], ...] = ()
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    unit: Optional[str] = None
    # Display text for read-only values, keyed by raw value
    display: Tuple[Tuple[str, str], ...] = ()
    iso_date: bool = False
    hidden: bool = False

    @property
    def choice_values(self) -> Tuple[str, ...]:
        return tuple(value for value, _ in self.choices)

    def display_value(self, value):
        return dict(self.display).get(value, value)


BOOKING_TIME_CHOICES = (
    ("morning", "Morning (9am - 12pm)"),
    ("afternoon", "Afternoon (12pm - 5pm)"),
    ("evening", "Evening (5pm - 8pm)"),
    ("any", "Any time"),
)

BARBER_CHOICES = (
    ("Mike Johnson", "Mike Johnson"),
    ("David Wilson", "David Wilson"),
    ("John Smith", "John Smith"),
    ("Alex Brown", "Alex Brown"),
    ("any", "No preference"),
)


FIELD_SCHEMA: Dict[str, Dict[str, FieldSpec]] = {
    "notifications": {
        "emailNotifications": FieldSpec("email_notifications", "Email Notifications", bool, TOGGLE,
                                        "Receive notifications by email"),
        "smsNotifications": FieldSpec("sms_notifications", "SMS Notifications", bool, TOGGLE,
                                      "Receive notifications by text message"),
        "appointmentReminders": FieldSpec("appointment_reminders", "Appointment Reminders", bool, TOGGLE,
                                          "Get reminded before your appointments"),
        "bookingConfirmations": FieldSpec("booking_confirmations", "Booking Confirmations", bool, TOGGLE,
                                          "Receive a confirmation when a booking is made"),
        "cancellationAlerts": FieldSpec("cancellation_alerts", "Cancellation Alerts", bool, TOGGLE,
                                        "Be told when an appointment is cancelled"),
        "promotionalEmails": FieldSpec("promotional_emails", "Promotional Emails", bool, TOGGLE,
                                       "Receive offers and news"),
        "reminderTiming": FieldSpec("reminder_timing", "Reminder Timing (hours before)", int, NUMBER,
                                    min_value=settings.REMINDER_TIMING_MIN_HOURS,
                                    max_value=settings.REMINDER_TIMING_MAX_HOURS,
                                    unit="hours"),
    },
    "booking": {
        "autoConfirmBookings": FieldSpec("auto_confirm_bookings", "Auto-confirm Bookings", bool, TOGGLE,
                                         "Confirm bookings without asking"),
        "allowOnlineBooking": FieldSpec("allow_online_booking", "Allow Online Booking", bool, TOGGLE,
                                        "Book appointments through the website"),
        "preferredBookingTime": FieldSpec("preferred_booking_time", "Preferred Booking Time", str, SELECT,
                                          choices=BOOKING_TIME_CHOICES),
        "bufferTimePreference": FieldSpec("buffer_time_preference", "Buffer Time (minutes)", int, NUMBER,
                                          "Minimum gap between back-to-back appointments",
                                          min_value=settings.BUFFER_TIME_MIN_MINUTES,
                                          max_value=settings.BUFFER_TIME_MAX_MINUTES,
                                          unit="minutes"),
        "favoriteBarber": FieldSpec("favorite_barber", "Favorite Barber", str, SELECT,
                                    choices=BARBER_CHOICES),
    },
    "privacy": {
        "shareDataForAnalytics": FieldSpec("share_data_for_analytics", "Share Data for Analytics", bool, TOGGLE,
                                           "Help us improve our services"),
        "allowMarketingCommunications": FieldSpec("allow_marketing_communications", "Marketing Communications",
                                                  bool, TOGGLE, "Receive marketing messages"),
        "showProfileToBarbers": FieldSpec("show_profile_to_barbers", "Show Profile to Barbers", bool, TOGGLE,
                                          "Let barbers see your profile and preferences"),
        "shareAppointmentHistory": FieldSpec("share_appointment_history", "Share Appointment History", bool,
                                             TOGGLE, "Let barbers see your previous appointments"),
    },
    "preferences": {
        "timezone": FieldSpec("timezone", "Timezone", str, READONLY),
        "language": FieldSpec("language", "Language", str, READONLY,
                              display=(("pt-BR", "Português (Brasil)"), ("en-US", "English (US)"))),
        "currency": FieldSpec("currency", "Currency", str, READONLY,
                              display=(("BRL", "Real (BRL)"), ("USD", "US Dollar (USD)"))),
        "dateFormat": FieldSpec("date_format", "Date Format", str, READONLY),
        "timeFormat": FieldSpec("time_format", "Time Format", str, READONLY,
                                display=(("24h", "24 hours"), ("12h", "12 hours"))),
    },
    "security": {
        "twoFactorAuth": FieldSpec("two_factor_auth", "Two-Factor Authentication", bool, TOGGLE,
                                   "Add an extra layer of security to your account"),
        "loginNotifications": FieldSpec("login_notifications", "Login Notifications", bool, TOGGLE,
                                        "Be notified of new logins to your account"),
        "sessionTimeout": FieldSpec("session_timeout", "Session Timeout (minutes)", int, NUMBER,
                                    min_value=settings.SESSION_TIMEOUT_MIN_MINUTES,
                                    max_value=settings.SESSION_TIMEOUT_MAX_MINUTES,
                                    unit="minutes"),
        # Shown next to the password reset action rather than as a control
        "passwordLastChanged": FieldSpec("password_last_changed", "Password Last Changed", str, READONLY,
                                         iso_date=True, hidden=True),
    },
    "loyalty": {
        "earnPoints": FieldSpec("earn_points", "Earn Loyalty Points", bool, TOGGLE,
                                "Earn points on every visit"),
        "receiveRewards": FieldSpec("receive_rewards", "Receive Rewards", bool, TOGGLE,
                                    "Be told when rewards are available"),
        "birthdayOffers": FieldSpec("birthday_offers", "Birthday Offers", bool, TOGGLE,
                                    "Receive a special offer on your birthday"),
        "referralProgram": FieldSpec("referral_program", "Referral Program", bool, TOGGLE,
                                     "Earn rewards by referring friends"),
    },
}


def lookup_field(category: str, key: str) -> Optional[FieldSpec]:
    """Find a field by its wire key or its attribute name."""
    fields = FIELD_SCHEMA.get(category)
    if fields is None:
        return None
    spec = fields.get(key)
    if spec is not None:
        return spec
    return next((s for s in fields.values() if s.attr == key), None)
