import json
from datetime import datetime

from aiomoto import mock_aws
from aiobotocore.session import get_session

from migraine_weather_alert.output import NotificationSink
from migraine_weather_alert.output.sqs import SqsNotificationSink

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789/test"


def test_sqs_sink_implements_protocol():
    sink = SqsNotificationSink(queue_url=QUEUE_URL, user_id="user-1")
    assert isinstance(sink, NotificationSink)


def test_sqs_sink_name_property():
    sink = SqsNotificationSink(queue_url=QUEUE_URL, user_id="user-1")
    assert sink.name == "sqs"


def test_sqs_sink_subscription_flag():
    assert SqsNotificationSink(queue_url=QUEUE_URL, user_id="u").is_subscribed is True
    assert SqsNotificationSink(queue_url=QUEUE_URL, user_id="u", subscribed=False).is_subscribed is False


@mock_aws
async def test_sqs_sink_sends_to_queue():
    session = get_session()
    async with session.create_client("sqs", region_name="us-east-1") as client:
        response = await client.create_queue(QueueName="test-queue")
        queue_url = response["QueueUrl"]

        sink = SqsNotificationSink(queue_url=queue_url, user_id="user-1", region="us-east-1")
        await sink.show_notification(
            "⚠️ High Migraine Risk Alert",
            "Low barometric pressure. High risk detected...",
            {"riskLevel": "high", "riskScore": 60, "alertId": "alert-1"},
        )

        messages = await client.receive_message(QueueUrl=queue_url)
        assert "Messages" in messages
        assert len(messages["Messages"]) == 1

        body = json.loads(messages["Messages"][0]["Body"])
        assert body["user_id"] == "user-1"
        assert body["title"] == "⚠️ High Migraine Risk Alert"
        assert body["body"].startswith("Low barometric pressure.")
        assert body["data"] == {"riskLevel": "high", "riskScore": 60, "alertId": "alert-1"}


@mock_aws
async def test_sqs_sink_serializes_timestamps():
    session = get_session()
    async with session.create_client("sqs", region_name="us-east-1") as client:
        response = await client.create_queue(QueueName="test-queue")
        queue_url = response["QueueUrl"]

        sink = SqsNotificationSink(queue_url=queue_url, user_id="user-1", region="us-east-1")
        await sink.show_notification("title", "body", {})

        messages = await client.receive_message(QueueUrl=queue_url)
        body = json.loads(messages["Messages"][0]["Body"])

        queued_at = datetime.fromisoformat(body["queued_at"])
        assert queued_at.tzinfo is not None
