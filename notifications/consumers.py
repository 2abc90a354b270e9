"""
WebSocket Consumers for Real-Time Notifications.

Each authenticated socket joins the user_<id> group that
NotificationDispatcher pushes to.
"""

import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.utils import timezone

from .services import user_group_name

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncWebsocketConsumer):
    """WebSocket consumer for a user's in-app notifications."""

    async def connect(self):
        """Handle WebSocket connection."""
        self.user = self.scope.get('user')

        if not self.user or not self.user.is_authenticated:
            await self.close(code=4001)
            return

        self.user_group = user_group_name(self.user.id)
        await self.channel_layer.group_add(self.user_group, self.channel_name)
        await self.accept()

        await self.send_json({
            'type': 'connection_established',
            'user_id': self.user.id,
            'timestamp': timezone.now().isoformat(),
        })
        logger.info(f"User {self.user.id} connected to notifications")

    async def disconnect(self, close_code):
        """Handle WebSocket disconnection."""
        if hasattr(self, 'user_group'):
            await self.channel_layer.group_discard(self.user_group, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        """Handle incoming WebSocket messages."""
        if not text_data:
            return

        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_json({'type': 'error', 'message': 'Invalid JSON'})
            return

        message_type = data.get('type')
        if message_type == 'mark_read':
            success = await self.mark_notification_read(data.get('notification_id'))
            await self.send_json({
                'type': 'mark_read_response',
                'notification_id': data.get('notification_id'),
                'success': success,
            })
        elif message_type == 'mark_all_read':
            count = await self.mark_all_read()
            await self.send_json({'type': 'mark_all_read_response', 'count': count})
        elif message_type == 'ping':
            await self.send_json({'type': 'pong'})
        else:
            await self.send_json({
                'type': 'error',
                'message': f'Unknown message type: {message_type}'
            })

    async def notification_message(self, event):
        """Forward a notification pushed through the channel layer."""
        await self.send_json({
            'type': 'new_notification',
            **event.get('notification', {}),
        })

    @database_sync_to_async
    def mark_notification_read(self, notification_id) -> bool:
        """Mark one of the user's notifications as read."""
        from .models import Notification

        notification = Notification.objects.filter(
            id=notification_id,
            recipient=self.user,
        ).first()
        if notification is None:
            return False
        notification.mark_as_read()
        return True

    @database_sync_to_async
    def mark_all_read(self) -> int:
        from .repositories import NotificationStore
        return NotificationStore().mark_all_as_read(self.user.id)

    async def send_json(self, content: dict):
        """Send JSON data to the WebSocket client."""
        await self.send(text_data=json.dumps(content))
