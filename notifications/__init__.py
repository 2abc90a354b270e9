"""
Notifications App for HireLink.

In-app notifications raised by the application lifecycle, pushed in real
time to the recipient's channel group.

Usage:
    from notifications.services import notification_dispatcher

    notification_dispatcher.send(
        recipient_id=user.id,
        notification_type='application_received',
        payload={'title': 'New Application Received', 'message': '...'},
    )
"""
