"""
Services answering the reminders and map endpoints from sample data.
"""

import logging
from typing import Optional

from travel_proxy.core.error_handler import InvalidRequestError
from travel_proxy.models.requests import ReminderAction
from travel_proxy.models.responses import (
    MapData,
    ReminderActionResponse,
    RemindersResponse,
)
from travel_proxy.services.sample_data import SampleDataSource


ALL_TYPES = "all"

ACTION_MESSAGES = {
    ReminderAction.COMPLETE: "Reminder marked as completed",
    ReminderAction.SNOOZE: "Reminder snoozed for 30 minutes",
    ReminderAction.DISMISS: "Reminder dismissed",
}


class ReminderService:
    """
    Lists sample reminders and acknowledges reminder actions.

    Actions are validated and acknowledged only: there is no backing store,
    so the reminder itself never changes.
    """

    def __init__(self, data_source: SampleDataSource):
        self.data_source = data_source
        self.logger = logging.getLogger(__name__)

    def list_reminders(self, reminder_type: Optional[str] = None) -> RemindersResponse:
        reminders = self.data_source.reminders()

        if reminder_type and reminder_type != ALL_TYPES:
            reminders = [r for r in reminders if r.type == reminder_type]

        return RemindersResponse(reminders=reminders, total=len(reminders))

    def apply_action(
        self,
        reminder_id: Optional[str],
        action: Optional[str]
    ) -> ReminderActionResponse:
        """
        Validate and acknowledge a reminder action.

        Raises:
            InvalidRequestError: Missing id or action, or an unrecognized action
        """
        if not reminder_id or not action:
            raise InvalidRequestError("Reminder ID and action are required")

        try:
            reminder_action = ReminderAction(action)
        except ValueError:
            raise InvalidRequestError("Invalid action", details=f"Unsupported action: {action}")

        self.logger.info(f"Reminder {reminder_id}: {reminder_action.value} acknowledged")
        return ReminderActionResponse(
            message=ACTION_MESSAGES[reminder_action],
            reminder_id=reminder_id,
        )


class MapService:
    """Serves the sample map, optionally keeping only one marker type."""

    def __init__(self, data_source: SampleDataSource):
        self.data_source = data_source
        self.logger = logging.getLogger(__name__)

    def get_map(self, location: Optional[str] = None, marker_type: Optional[str] = None) -> MapData:
        if location:
            self.logger.info(f"Map requested for location {location!r}; serving sample map")

        map_data = self.data_source.map_data()
        if marker_type:
            map_data.markers = [m for m in map_data.markers if m.type == marker_type]
        return map_data
