# app/schemas/settings.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, List, Literal, Optional, Union

SettingsCategory = Literal["notifications", "booking", "privacy", "preferences", "security", "loyalty"]
BookingTime = Literal["morning", "afternoon", "evening", "any"]
BarberChoice = Literal["Mike Johnson", "David Wilson", "John Smith", "Alex Brown", "any"]
ToastLevel = Literal["success", "error"]


class _CategoryModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)


class NotificationSettings(_CategoryModel):
    email_notifications: bool = True
    sms_notifications: bool = True
    appointment_reminders: bool = True
    promotional_emails: bool = False
    booking_confirmations: bool = True
    cancellation_alerts: bool = True
    reminder_timing: int = 24

class BookingSettings(_CategoryModel):
    auto_confirm_bookings: bool = False
    allow_online_booking: bool = True
    preferred_booking_time: BookingTime = "afternoon"
    buffer_time_preference: int = 15
    favorite_barber: BarberChoice = "Mike Johnson"

class PrivacySettings(_CategoryModel):
    share_data_for_analytics: bool = False
    allow_marketing_communications: bool = False
    show_profile_to_barbers: bool = True
    share_appointment_history: bool = True

class PreferenceSettings(_CategoryModel):
    timezone: str = "America/Sao_Paulo"
    language: str = "pt-BR"
    currency: str = "BRL"
    date_format: str = "DD/MM/YYYY"
    time_format: str = "24h"

class SecuritySettings(_CategoryModel):
    two_factor_auth: bool = False
    session_timeout: int = 60
    password_last_changed: str = "2023-05-15"
    login_notifications: bool = True

class LoyaltySettings(_CategoryModel):
    earn_points: bool = True
    receive_rewards: bool = True
    birthday_offers: bool = True
    referral_program: bool = True


class CustomerSettings(_CategoryModel):
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    booking: BookingSettings = Field(default_factory=BookingSettings)
    privacy: PrivacySettings = Field(default_factory=PrivacySettings)
    preferences: PreferenceSettings = Field(default_factory=PreferenceSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    loyalty: LoyaltySettings = Field(default_factory=LoyaltySettings)


SettingValue = Union[bool, int, str]

class CategoryUpdateRequest(BaseModel):
    key: str
    value: SettingValue

class SettingUpdate(BaseModel):
    """Tagged update: one key in one category."""
    category: SettingsCategory
    key: str
    value: SettingValue

class DeleteAccountRequest(BaseModel):
    confirmed: bool = False


class Toast(BaseModel):
    level: ToastLevel
    message: str


class ControlView(BaseModel):
    key: str
    label: str
    control: Literal["toggle", "number", "select", "readonly"]
    value: Any
    description: Optional[str] = None
    options: Optional[List[dict]] = None
    unit: Optional[str] = None

class ActionView(BaseModel):
    action: str
    label: str
    description: str
    danger: bool = False
    confirm_prompt: Optional[str] = None

class SectionView(BaseModel):
    id: str
    title: str
    description: str
    controls: List[ControlView] = []
    actions: List[ActionView] = []

class SettingsPageView(BaseModel):
    page_id: str
    title: str
    subtitle: str
    has_changes: bool
    can_save: bool
    sections: List[SectionView]


class PageResponse(BaseModel):
    success: bool = True
    view: SettingsPageView
    toasts: List[Toast] = []
