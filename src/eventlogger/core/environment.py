"""Host application and device metadata attached to every event."""

import os
import platform
import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class AppEnvironment:
    """Application and device identity fields.

    Attributes:
        app_id: Identifier of the host application.
        app_name: Human readable name of the host application.
        app_version: Version of the host application.
        os_version: Operating system release.
        device_model: Hardware model.
        device_brand: Operating system family.
        device_name: Host name of the device.
        platform: Runtime platform string.
    """

    app_id: str = ""
    app_name: str = ""
    app_version: str = ""
    os_version: str = ""
    device_model: str = ""
    device_brand: str = ""
    device_name: str = ""
    platform: str = ""

    @classmethod
    def detect(
        cls,
        app_id: str | None = None,
        app_name: str | None = None,
        app_version: str = "",
    ) -> "AppEnvironment":
        """Collect metadata from the running interpreter and OS.

        Args:
            app_id: Application identifier. Defaults to the app name.
            app_name: Application name. Defaults to the script name.
            app_version: Application version.

        Returns:
            AppEnvironment populated from the platform module.
        """
        script = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
        name = app_name if app_name is not None else script or "python"
        uname = platform.uname()
        return cls(
            app_id=app_id if app_id is not None else name,
            app_name=name,
            app_version=app_version,
            os_version=uname.release,
            device_model=uname.machine,
            device_brand=uname.system,
            device_name=uname.node,
            platform=f"{platform.python_implementation()} {platform.python_version()}",
        )
