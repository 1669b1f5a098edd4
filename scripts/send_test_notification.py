#!/usr/bin/env python3
"""
Send a one-off promotional push to the broadcast topic.

Devices only receive it if the Android app subscribed to the topic
(FirebaseMessaging.getInstance().subscribeToTopic("updates")).
Credentials come from GOOGLE_SERVICE_ACCOUNT_JSON or service-account.json.
"""

import asyncio
import os
import sys

# Add the app directory to the Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from app.core.exceptions import DeliveryError
from app.services.fcm_service import fcm_service

TITLE = "🎅 Christmas Offer!"
BODY = "Get 50% off on all Christmas items today! 🎄"


async def main() -> int:
    print(f"Sending message to topic: {fcm_service.topic}...")
    try:
        message_id = await fcm_service.send_to_topic(TITLE, BODY, sound="default")
    except DeliveryError as e:
        print(f"❌ Error sending message: {e}")
        return 1

    print(f"✅ Successfully sent message: {message_id}")
    return 0


if __name__ == '__main__':
    sys.exit(asyncio.run(main()))
