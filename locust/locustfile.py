"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Test double-booked seats
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests

After a concurrency run, verify:
  GET /attendees?eventId=<id>&eventDate=2030-06-01
Every seatNumber must be unique and there must be at most MAX_SEATS_PER_DATE rows.
"""

import random
import string
from locust import HttpUser, task, between, tag, events

# Shared state
EVENT_IDS = []
CONCURRENCY_EVENT_ID = None
CONCURRENCY_DATE = "2030-06-01"


def random_email():
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"load_{suffix}@test.com"


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "="*60)
    print("SETUP: Creating concurrency test event...")
    print("="*60)


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - many users fight for one event date

    Run: locust -f locustfile.py --tags concurrency -u 200 -r 50 --run-time 30s
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.email = random_email()
        self.reserved = False

        if not CONCURRENCY_EVENT_ID:
            resp = self.client.post("/events", json={
                "name": "Concurrency Test Event",
                "eventDates": [CONCURRENCY_DATE],
                "details": "Limited seating",
            })
            if resp.status_code == 201:
                globals()["CONCURRENCY_EVENT_ID"] = resp.json()["event"]["id"]
                print(f"\n✓ Created event {CONCURRENCY_EVENT_ID}\n")

    @tag("concurrency")
    @task(5)
    def reserve_seat(self):
        """Each user tries to hold exactly one seat."""
        if not CONCURRENCY_EVENT_ID:
            return

        with self.client.post("/reserve",
            json={
                "name": "Load User",
                "email": self.email,
                "eventId": CONCURRENCY_EVENT_ID,
                "eventDate": CONCURRENCY_DATE,
            },
            catch_response=True
        ) as resp:
            if resp.status_code == 200:
                self.reserved = True
                resp.success()
            elif resp.status_code == 400:
                resp.success()  # Expected: already reserved or sold out
            else:
                resp.failure(f"Unexpected: {resp.status_code}")

    @tag("concurrency")
    @task(2)
    def modify_seat(self):
        """Shuffle seats while others are reserving."""
        if not self.reserved:
            return

        with self.client.put("/modify",
            json={"email": self.email, "eventId": CONCURRENCY_EVENT_ID, "eventDate": CONCURRENCY_DATE},
            catch_response=True
        ) as resp:
            if resp.status_code in [200, 400]:
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")

    @tag("concurrency")
    @task(1)
    def cancel_seat(self):
        """Give a seat back so someone else can take it."""
        if not self.reserved:
            return

        with self.client.request("DELETE", "/cancel",
            json={"email": self.email, "eventId": CONCURRENCY_EVENT_ID, "eventDate": CONCURRENCY_DATE},
            catch_response=True
        ) as resp:
            if resp.status_code == 200:
                self.reserved = False
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class EdgeCaseUser(HttpUser):
    """
    TEST 2: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def invalid_event_id(self):
        """Reserve for a non-existent event."""
        with self.client.post("/reserve",
            json={"name": "Ghost", "email": random_email(), "eventId": 999999, "eventDate": "2030-01-01"},
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def missing_fields(self):
        with self.client.post("/reserve", json={"name": "Nobody"}, catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def non_numeric_attendee_query(self):
        with self.client.get("/attendees?eventId=abc&eventDate=2030-01-01",
            name="/attendees [invalid]",
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        """Send garbage data."""
        with self.client.post("/reserve",
            data="not json at all",
            headers={"Content-Type": "application/json"},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])


class RealisticUser(HttpUser):
    """
    TEST 3: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly browsing
      - Some reservations and lookups
      - Rare creates
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.email = random_email()

    @task(50)
    def browse_events(self):
        resp = self.client.get("/events")
        if resp.status_code == 200:
            for event in resp.json():
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(20)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/events/{random.choice(EVENT_IDS)}", name="/events/{id}")

    @task(10)
    def reserve(self):
        if not EVENT_IDS:
            return
        event = self.client.get(f"/events/{random.choice(EVENT_IDS)}", name="/events/{id}").json()
        self.client.post("/reserve", json={
            "name": "Realistic User",
            "email": self.email,
            "eventId": event["id"],
            "eventDate": random.choice(event["eventDates"]),
        })

    @task(5)
    def my_tickets(self):
        with self.client.get(f"/ticket?email={self.email}", name="/ticket", catch_response=True) as resp:
            if resp.status_code in [200, 404]:
                resp.success()

    @task(3)
    def create_event(self):
        resp = self.client.post("/events", json={
            "name": f"Event {random.randint(1, 10000)}",
            "eventDates": [f"2030-07-{day:02d}" for day in random.sample(range(1, 29), 2)],
            "details": "Test event",
        })
        if resp.status_code == 201:
            EVENT_IDS.append(resp.json()["event"]["id"])
