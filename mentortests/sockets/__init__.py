"""
Sockets Package
"""
from mentortests.sockets.channel_events import register_socket_events

__all__ = ['register_socket_events']
