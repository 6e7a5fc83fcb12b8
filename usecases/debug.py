from datetime import datetime, timezone
from typing import Any, Dict

from loguru import logger

from utils.constants import ANDROID_PUBLISHER_API_VERSION, ANDROID_PUBLISHER_SCOPES


class DebugUseCase:
    def __init__(self, google_play):
        self.google_play = google_play

    def google_play_report(self, package_name: str) -> Dict[str, Any]:
        """Checks the service account can authenticate and probes app metadata.

        Authentication errors propagate; a failed metadata probe is reported
        in the bundle instead.
        """
        logger.info(f"Testing Google Play Console API connection for {package_name}")

        service_account = self.google_play.check_authentication()
        logger.info("Authentication successful")

        report = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "serviceAccount": service_account,
            "packageName": package_name,
            "authTest": "SUCCESS",
            "scopes": ANDROID_PUBLISHER_SCOPES,
            "apiVersion": ANDROID_PUBLISHER_API_VERSION
        }

        try:
            report["appDetails"] = self.google_play.get_app_details(package_name)
        except Exception as e:
            logger.warning(f"Could not fetch app details for {package_name}: {e}")
            report["appDetailsError"] = str(e)

        return report
