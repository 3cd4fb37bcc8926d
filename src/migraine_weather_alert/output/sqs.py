import json
from datetime import UTC, datetime
from typing import Any

from aiobotocore.session import get_session


class SqsNotificationSink:
    """Queues notifications on SQS for a push-delivery worker."""

    def __init__(
        self,
        queue_url: str,
        user_id: str,
        region: str = "us-east-1",
        subscribed: bool = True,
    ) -> None:
        self._queue_url = queue_url
        self._user_id = user_id
        self._region = region
        self._subscribed = subscribed
        self._session = get_session()

    @property
    def name(self) -> str:
        return "sqs"

    @property
    def is_subscribed(self) -> bool:
        return self._subscribed

    async def show_notification(self, title: str, body: str, data: dict[str, Any]) -> None:
        async with self._session.create_client("sqs", region_name=self._region) as client:
            await client.send_message(
                QueueUrl=self._queue_url,
                MessageBody=self._serialize(title, body, data),
            )

    def _serialize(self, title: str, body: str, data: dict[str, Any]) -> str:
        message = {
            "user_id": self._user_id,
            "title": title,
            "body": body,
            "data": data,
            "queued_at": datetime.now(UTC),
        }
        return json.dumps(message, default=self._json_default)

    @staticmethod
    def _json_default(obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
