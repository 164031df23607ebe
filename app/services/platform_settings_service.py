"""
Platform settings service.

Reads the admin-managed settings the calculators depend on.
"""

from app.config.settings import settings as app_settings
from app.repositories.admin_settings_repository import AdminSettingsRepository
from app.services.base_service import BaseService
from smartgrow.core.models import PlatformSettings


class PlatformSettingsService(BaseService):
    """Loads PlatformSettings from the admin_settings table."""

    async def get_settings(self) -> PlatformSettings:
        """
        Current platform settings.

        Falls back to the environment defaults, with a warning, when the
        admin has never saved settings. A stored row with invalid values
        raises InvalidRecord instead of being patched.

        Returns:
            PlatformSettings
        """
        row = await AdminSettingsRepository(self.session).get_current()
        if row is None:
            self.logger.warning("admin_settings row missing, using environment defaults")
            return app_settings.default_platform_settings()
        return PlatformSettings.parse(row)
