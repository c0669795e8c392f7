"""Django app configuration for Ppeman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class PpemanConfig(AppConfig):
    """Configuration for Ppeman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ppeman"
    verbose_name = _("PPE Inventory")
