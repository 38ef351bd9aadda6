from typing import Dict, Type, Optional
from .base_platform import CalendarPlatform
from .google_calendar import GoogleCalendarPlatform

class PlatformFactory:
    """Factory class for creating calendar platform instances"""

    _platforms: Dict[str, Type[CalendarPlatform]] = {
        'google': GoogleCalendarPlatform
    }

    @classmethod
    def get_platform(cls, platform_name: Optional[str], access_token: Optional[str] = None) -> CalendarPlatform:
        """
        Get an instance of the requested platform

        Args:
            platform_name: String identifier for the platform
            access_token: OAuth access token the platform authenticates with

        Returns:
            CalendarPlatform instance

        Raises:
            ValueError: If platform_name is not supported
        """
        supported = ", ".join(cls._platforms.keys())
        if platform_name is None:
            raise ValueError(
                f"Unsupported platform: None. "
                f"Supported platforms are: {supported}"
            )

        platform_class = cls._platforms.get(platform_name.lower())
        if not platform_class:
            raise ValueError(
                f"Unsupported platform: {platform_name}. "
                f"Supported platforms are: {supported}"
            )
        return platform_class(access_token=access_token)
