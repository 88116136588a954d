"""Render a settings page into sections of bound controls."""
from typing import List

from ..application.services.settings_page_service import DELETE_CONFIRM_PROMPT, SettingsPage
from ..schemas.settings.fields import FIELD_SCHEMA, READONLY, SELECT
from ..schemas.settings.settings import ActionView, ControlView, CustomerSettings, SectionView, SettingsPageView

PAGE_TITLE = "Settings"
PAGE_SUBTITLE = "Manage your account preferences and privacy settings"

SECTION_TEXT = {
    "notifications": ("Notification Preferences", "Choose how and when you want to be notified"),
    "booking": ("Booking Preferences", "Customize your booking experience"),
    "privacy": ("Privacy Settings", "Control how your information is used"),
    "preferences": ("General Preferences", "Regional and display settings"),
    "loyalty": ("Loyalty Program", "Manage your loyalty program preferences"),
    "security": ("Security Settings", "Keep your account secure"),
}

# Display order matches the dashboard layout
SECTION_ORDER = ("notifications", "booking", "privacy", "preferences", "loyalty", "security")


def _controls(settings: CustomerSettings, category: str) -> List[ControlView]:
    section = getattr(settings, category)
    controls = []
    for key, spec in FIELD_SCHEMA[category].items():
        if spec.hidden:
            continue
        value = getattr(section, spec.attr)
        options = None
        if spec.control == SELECT:
            options = [{"value": v, "label": label} for v, label in spec.choices]
        if spec.control == READONLY:
            value = spec.display_value(value)
        controls.append(ControlView(
            key=key,
            label=spec.label,
            control=spec.control,
            value=value,
            description=spec.description,
            options=options,
            unit=spec.unit,
        ))
    return controls


def _security_actions(settings: CustomerSettings) -> List[ActionView]:
    return [ActionView(
        action="reset-password",
        label="Reset Password",
        description=f"Last changed: {settings.security.password_last_changed}",
    )]


def _account_section() -> SectionView:
    return SectionView(
        id="account",
        title="Account Management",
        description="Manage your account data",
        actions=[
            ActionView(
                action="export-data",
                label="Export Data",
                description="Download a copy of your personal data",
            ),
            ActionView(
                action="delete-account",
                label="Delete Account",
                description="Permanently delete your account and all data",
                danger=True,
                confirm_prompt=DELETE_CONFIRM_PROMPT,
            ),
        ],
    )


def render_settings_page(page: SettingsPage) -> SettingsPageView:
    sections = []
    for category in SECTION_ORDER:
        title, description = SECTION_TEXT[category]
        actions = _security_actions(page.settings) if category == "security" else []
        sections.append(SectionView(
            id=category,
            title=title,
            description=description,
            controls=_controls(page.settings, category),
            actions=actions,
        ))
    sections.append(_account_section())
    return SettingsPageView(
        page_id=page.page_id,
        title=PAGE_TITLE,
        subtitle=PAGE_SUBTITLE,
        has_changes=page.has_changes,
        can_save=page.has_changes,
        sections=sections,
    )
