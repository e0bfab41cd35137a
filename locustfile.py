from locust import HttpUser, task, between
import random
import time
import uuid

PUBSUB_TOPIC = "/waku/2/default-waku/proto"
CONTENT_TOPIC = "/waku/1/0x0a1b2c3d/rfc26"


def _waku_message(index: int, total: int, sequence_hash: str) -> dict:
    return {
        "walletAddress": "0x" + uuid.uuid4().hex[:40],
        "peerIdSender": "16Uiu2HAm" + uuid.uuid4().hex[:16],
        "peerIdReporter": "16Uiu2HAm" + uuid.uuid4().hex[:16],
        "sequenceHash": sequence_hash,
        "sequenceTotal": total,
        "sequenceIndex": index,
        "contentTopic": CONTENT_TOPIC,
        "pubsubTopic": PUBSUB_TOPIC,
        "timestamp": int(time.time()),
    }


class TelemetryNode(HttpUser):
    wait_time = between(1, 2)

    @task(3)
    def waku_messages(self):
        # one sequence of 1..10 messages per request
        total = random.randint(1, 10)
        sequence_hash = uuid.uuid4().hex
        self.client.post(
            "/waku-messages",
            json=[_waku_message(i, total, sequence_hash) for i in range(total)],
        )

    @task(1)
    def protocol_stats(self):
        self.client.post(
            "/protocol-stats",
            json={
                "hostID": "16Uiu2HAm" + uuid.uuid4().hex[:16],
                "relay": {"totalIn": random.randint(0, 10_000), "totalOut": random.randint(0, 10_000), "rateIn": random.random() * 100, "rateOut": random.random() * 100},
            },
        )

    @task(1)
    def envelope_lifecycle(self):
        envelope = {
            "messageHash": "0x" + uuid.uuid4().hex,
            "sentAt": int(time.time()),
            "pubsubTopic": PUBSUB_TOPIC,
            "topic": CONTENT_TOPIC,
            "receiverKeyUID": uuid.uuid4().hex,
            "nodeName": "locust-node",
        }
        resp = self.client.post("/received-envelope", json=envelope)
        created = resp.json() if resp.status_code == 201 else {}
        if created.get("id"):
            created["processingError"] = "could not decrypt"
            self.client.post("/update-envelope", json=created)
