"""
Notification Service
Best-effort push to a user's live Socket.IO channels
"""
from flask import current_app

from mentortests.extensions import socketio, live_channels


class NotificationService:
    """Fire-and-forget user notifications"""

    @staticmethod
    def notify_user(user_id, event, payload):
        """
        Emit event to every socket the user has open

        Never raises: an offline user or a failed emit is logged. Returns
        True when at least one socket accepted the event.
        """
        sids = live_channels.sids_for(user_id)
        if not sids:
            current_app.logger.info("User %s has no live channel, %s not pushed", user_id, event)
            return False

        delivered = 0
        for sid in sids:
            try:
                socketio.emit(event, payload, to=sid)
            except Exception:
                current_app.logger.exception("Failed to push %s to user %s (%s)", event, user_id, sid)
                continue
            delivered += 1

        current_app.logger.info("Pushed %s to user %s on %d/%d sockets", event, user_id, delivered, len(sids))
        return delivered > 0
