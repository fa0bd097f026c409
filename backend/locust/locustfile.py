"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags contention   # Concurrent payment of one booking
  locust -f locustfile.py --tags lifecycle    # create -> agree -> pay per user
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from datetime import date, timedelta

from locust import HttpUser, task, between, tag, events

# Shared state
EVENT_IDS = []
CONTENDED_BOOKING_ID = None
PASSWORD = "loadtest123"


def random_email():
    return f"load_{random.randint(100000, 999999)}@test.com"


def random_username():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: users register on start, first one creates the shared event")
    print("=" * 60)


class BookingClient(HttpUser):
    """Registers and logs in a fresh account; shared by every scenario."""

    abstract = True

    def on_start(self):
        username = random_username()
        resp = self.client.post("/api/v1/auth/register", json={
            "full_name": "Load Tester",
            "email": random_email(),
            "username": username,
            "password": PASSWORD,
        })
        self.user_id = resp.json()["id"] if resp.status_code == 201 else None

        resp = self.client.post("/api/v1/auth/login", json={"username": username, "password": PASSWORD})
        if resp.status_code == 200:
            self.headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
        else:
            self.headers = {}

        if not EVENT_IDS and self.headers:
            resp = self.client.post("/api/v1/events/", json={
                "name": f"Load Event {random.randint(1, 10000)}",
                "description": "Load test event",
                "event_date": (date.today() + timedelta(days=30)).isoformat(),
                "city": "Test City",
                "venue": "Test Venue",
            }, headers=self.headers)
            if resp.status_code == 201:
                EVENT_IDS.append(resp.json()["id"])

    def create_booking(self, price=5000):
        if not EVENT_IDS or not self.user_id:
            return None
        resp = self.client.post("/api/v1/bookings/", json={
            "user_id": self.user_id,
            "event_id": random.choice(EVENT_IDS),
            "plan": random.choice(["Silver", "Gold", "Platinum"]),
            "price": price,
            "guests": random.randint(1, 50),
        })
        return resp.json()["id"] if resp.status_code == 201 else None


class ContentionUser(BookingClient):
    """
    TEST 1: Every user pays the same booking at once.

    Run: locust -f locustfile.py --tags contention -u 100 -r 50 --run-time 30s

    Each pay bumps the booking version, so overlapping requests lose the
    race with 409 instead of overwriting each other. After the run:
      SELECT status, version FROM bookings WHERE id = X;
    version - 1 equals the number of successful writes.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        super().on_start()
        if not CONTENDED_BOOKING_ID:
            booking_id = self.create_booking()
            if booking_id:
                globals()["CONTENDED_BOOKING_ID"] = booking_id
                print(f"\nCreated contended booking {booking_id}\n")

    @tag("contention")
    @task
    def pay_same_booking(self):
        if not CONTENDED_BOOKING_ID:
            return

        with self.client.post(
            f"/api/v1/bookings/{CONTENDED_BOOKING_ID}/pay",
            json={"price": 5000},
            name="/api/v1/bookings/{id}/pay [contended]",
            catch_response=True,
        ) as resp:
            if resp.status_code in (200, 409):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class LifecycleUser(BookingClient):
    """
    TEST 2: Full lifecycle per user, each on its own booking.

    Run: locust -f locustfile.py --tags lifecycle -u 100 -r 20 --run-time 60s
    """
    wait_time = between(0.1, 0.5)

    @tag("lifecycle")
    @task
    def book_agree_pay(self):
        booking_id = self.create_booking(price=random.choice([1000, 2500, 5000]))
        if not booking_id:
            return

        self.client.put(f"/api/v1/bookings/{booking_id}/agree", name="/api/v1/bookings/{id}/agree")
        with self.client.post(
            f"/api/v1/bookings/{booking_id}/pay",
            json={"price": 5000},
            name="/api/v1/bookings/{id}/pay",
            catch_response=True,
        ) as resp:
            if resp.status_code == 200 and resp.json()["status"] == "PAID":
                resp.success()
            else:
                resp.failure(f"Payment failed: {resp.status_code}")

    @tag("lifecycle", "read")
    @task(3)
    def my_bookings(self):
        if self.user_id:
            self.client.get(f"/api/v1/bookings/user/{self.user_id}", name="/api/v1/bookings/user/{id}")


class EdgeCaseUser(BookingClient):
    """
    TEST 3: Edge cases - Bad input handling

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
        with self.client.post("/api/v1/bookings/",
            json={"user_id": self.user_id, "event_id": 999999, "plan": "Gold", "price": 10, "guests": 1},
            catch_response=True,
        ) as resp:
            self._expect(resp, (404,))

    @tag("edge")
    @task
    def missing_user_id(self):
        with self.client.post("/api/v1/bookings/",
            json={"event_id": 1, "plan": "Gold", "price": 10, "guests": 1},
            catch_response=True,
        ) as resp:
            self._expect(resp, (400,))

    @tag("edge")
    @task
    def zero_guests(self):
        with self.client.post("/api/v1/bookings/",
            json={"user_id": self.user_id, "event_id": 1, "price": 10, "guests": 0},
            catch_response=True,
        ) as resp:
            self._expect(resp, (422,))

    @tag("edge")
    @task
    def unknown_coupon(self):
        booking_id = self.create_booking()
        if not booking_id:
            return
        with self.client.post(f"/api/v1/bookings/{booking_id}/pay",
            json={"price": 4500, "coupon": "NO_SUCH_CODE"},
            name="/api/v1/bookings/{id}/pay [bad coupon]",
            catch_response=True,
        ) as resp:
            self._expect(resp, (404,))

    @tag("edge")
    @task
    def pay_missing_booking(self):
        with self.client.post("/api/v1/bookings/999999/pay",
            json={"price": 100},
            catch_response=True,
        ) as resp:
            self._expect(resp, (404,))

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/bookings/",
            data="not json at all",
            catch_response=True,
        ) as resp:
            self._expect(resp, (400, 422))

    @tag("edge")
    @task
    def wrong_otp(self):
        with self.client.post("/api/v1/auth/reset-password",
            json={"identifier": "nobody_here", "otp": "000000", "new_password": "whatever123"},
            catch_response=True,
        ) as resp:
            self._expect(resp, (400,))


class RealisticUser(BookingClient):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing, some bookings, rare cancellations.
    """
    wait_time = between(1, 3)

    @task(50)
    def browse_events(self):
        resp = self.client.get("/api/v1/events/?upcoming_only=true")
        if resp.status_code == 200:
            for event in resp.json():
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(20)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/api/v1/events/{random.choice(EVENT_IDS)}", name="/api/v1/events/{id}")

    @task(10)
    def book(self):
        self.create_booking(price=random.randint(500, 10000))

    @task(2)
    def book_and_cancel(self):
        booking_id = self.create_booking()
        if booking_id:
            self.client.post(f"/api/v1/bookings/{booking_id}/cancel", name="/api/v1/bookings/{id}/cancel")

    @task(1)
    def health_check(self):
        self.client.get("/health")
