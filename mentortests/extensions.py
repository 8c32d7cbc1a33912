"""
Flask Extensions
Centralized extension initialization
"""
import threading

from flask_sqlalchemy import SQLAlchemy
from flask_socketio import SocketIO


class ChannelRegistry:
    """
    Process-wide map of user id -> live Socket.IO sids.
    A user has one sid per open connection (tab, device).
    Rebuilt from connections as they arrive; lost on restart.
    Never consulted for correctness, only for push delivery.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._channels = {}

    def register(self, user_id, sid):
        with self._lock:
            self._channels.setdefault(str(user_id), set()).add(sid)

    def unregister_sid(self, sid):
        """Drop this sid only; returns the owning user id or None"""
        with self._lock:
            for user_id, sids in list(self._channels.items()):
                if sid in sids:
                    sids.discard(sid)
                    if not sids:
                        del self._channels[user_id]
                    return user_id
        return None

    def sids_for(self, user_id):
        with self._lock:
            return sorted(self._channels.get(str(user_id), ()))

    def online_users(self):
        with self._lock:
            return list(self._channels.keys())

    def clear(self):
        with self._lock:
            self._channels.clear()


# Initialize extensions (without app binding)
db = SQLAlchemy()
socketio = SocketIO()

live_channels = ChannelRegistry()
