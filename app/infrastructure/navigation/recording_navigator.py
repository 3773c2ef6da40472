from __future__ import annotations

import logging

from app.application.ports.navigator import NavigatorPort


class RecordingNavigator(NavigatorPort):
    """Remembers where the client should be sent next; the API hands it back as a redirect."""

    def __init__(self, dashboard_path: str = "/parent-dashboard", marketing_path: str = "/public-landing-page") -> None:
        self._dashboard_path = dashboard_path
        self._marketing_path = marketing_path
        self.redirect_to: str | None = None
        self._logger = logging.getLogger(__name__)

    def go_to_dashboard(self) -> None:
        self.redirect_to = self._dashboard_path
        self._logger.info("Redirecting to dashboard")

    def go_to_marketing_site(self) -> None:
        self.redirect_to = self._marketing_path
        self._logger.info("Redirecting to marketing site")
