"""
Socket.IO Event Handlers
Live channel registration and room relay
"""
from flask import session, request, current_app
from flask_socketio import emit, join_room

from mentortests.extensions import socketio, live_channels


def register_socket_events():
    """Register all Socket.IO event handlers"""

    @socketio.on('connect')
    def handle_connect(auth=None):
        """
        Register the connecting user's channel

        The identity is the logged-in session user. A userId query
        parameter is only accepted when it names that same user.
        """
        user_id = session.get('user_id')
        claimed = request.args.get('userId')

        if claimed and (user_id is None or claimed != str(user_id)):
            current_app.logger.warning(
                "Refused socket %s claiming user %s (session user %s)", request.sid, claimed, user_id
            )
            return False

        if user_id is not None:
            live_channels.register(user_id, request.sid)
            current_app.logger.info("User %s connected with socket %s", user_id, request.sid)
        broadcast_online_users()

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Prune the channel of a disconnecting socket"""
        user_id = live_channels.unregister_sid(request.sid)
        if user_id is not None:
            current_app.logger.info("User %s disconnected", user_id)
        broadcast_online_users()

    @socketio.on('get_online_users')
    def handle_get_online_users(*args):
        emit('getOnlineUsers', live_channels.online_users())

    @socketio.on('join_room')
    def handle_join_room(room):
        """Join a discussion room"""
        join_room(str(room))

    @socketio.on('send_message')
    def handle_send_message(data):
        """Relay a message to everyone else in the room"""
        room = str(data.get('room', '')) if isinstance(data, dict) else ''
        if not room:
            return
        emit('receive_message', data, to=room, include_self=False)


def broadcast_online_users():
    socketio.emit('getOnlineUsers', live_channels.online_users())
