"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Test overbooking
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests

After a concurrency run, check the capacity held:
  curl http://localhost:8000/concerts/<id>/stats   # reservedCount must be <= 10
"""

import random
import string
from locust import HttpUser, task, between, tag, events

CONCERT_IDS = []
CONCURRENCY_CONCERT_ID = None
CONCURRENCY_SEATS = 10


def random_user_id():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "="*60)
    print(f"SETUP: first ConcurrencyUser creates a {CONCURRENCY_SEATS}-seat concert")
    print("="*60)


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - 100 users -> 10 seats

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    Every user also retries its own reservation, so duplicates (409) are
    exercised alongside sold-out rejections (400).
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.user_id = random_user_id()

        if not CONCURRENCY_CONCERT_ID:
            resp = self.client.post("/concerts", json={
                "name": "Concurrency Test Concert",
                "description": f"{CONCURRENCY_SEATS} seats only",
                "seat": CONCURRENCY_SEATS,
            })
            if resp.status_code == 201:
                globals()["CONCURRENCY_CONCERT_ID"] = resp.json()["id"]
                print(f"\nCreated concert {CONCURRENCY_CONCERT_ID} with {CONCURRENCY_SEATS} seats\n")

    @tag("concurrency")
    @task
    def reserve_limited_seats(self):
        """All users fight for the same 10 seats."""
        if not CONCURRENCY_CONCERT_ID:
            return

        with self.client.post("/reservations",
            json={"userId": self.user_id, "concertId": CONCURRENCY_CONCERT_ID},
            catch_response=True
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code in (400, 409):
                resp.success()  # Expected: sold out or already reserved
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class EdgeCaseUser(HttpUser):
    """
    TEST 2: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    @tag("edge")
    @task
    def unknown_concert(self):
        with self.client.post("/reservations",
            json={"userId": random_user_id(), "concertId": 999999},
            catch_response=True
        ) as resp:
            if resp.status_code == 404:
                resp.success()
            else:
                resp.failure(f"Expected 404, got {resp.status_code}")

    @tag("edge")
    @task
    def zero_seat_concert(self):
        with self.client.post("/concerts",
            json={"name": "Empty", "description": "", "seat": 0},
            catch_response=True
        ) as resp:
            if resp.status_code == 422:
                resp.success()
            else:
                resp.failure(f"Expected 422, got {resp.status_code}")

    @tag("edge")
    @task
    def cancel_foreign_reservation(self):
        """Try to cancel reservation 1 as a random user."""
        with self.client.request("DELETE", "/reservations/cancel",
            json={"userId": random_user_id(), "reservationId": 1},
            catch_response=True
        ) as resp:
            if resp.status_code in (403, 404):
                resp.success()
            else:
                resp.failure(f"Expected 403/404, got {resp.status_code}")

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/reservations",
            data="not json at all",
            catch_response=True
        ) as resp:
            if resp.status_code in (400, 422):
                resp.success()
            else:
                resp.failure(f"Expected 400/422, got {resp.status_code}")


class RealisticUser(HttpUser):
    """
    TEST 3: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing, some reserve/cancel cycles, rare concert creation.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.user_id = random_user_id()
        self.reservation_ids = []

    @task(50)
    def browse_concerts(self):
        resp = self.client.get("/concerts")
        if resp.status_code == 200:
            for concert in resp.json():
                if concert["id"] not in CONCERT_IDS:
                    CONCERT_IDS.append(concert["id"])

    @task(20)
    def view_stats(self):
        if CONCERT_IDS:
            self.client.get(f"/concerts/{random.choice(CONCERT_IDS)}/stats",
                name="/concerts/{id}/stats")

    @task(10)
    def reserve(self):
        if CONCERT_IDS:
            resp = self.client.post("/reservations",
                json={"userId": self.user_id, "concertId": random.choice(CONCERT_IDS)})
            if resp.status_code == 201:
                self.reservation_ids.append(resp.json()["id"])

    @task(5)
    def cancel(self):
        if self.reservation_ids:
            reservation_id = self.reservation_ids.pop()
            self.client.request("DELETE", "/reservations/cancel",
                json={"userId": self.user_id, "reservationId": reservation_id})

    @task(3)
    def my_reservations(self):
        self.client.get(f"/reservations?userId={self.user_id}", name="/reservations?userId")

    @task(1)
    def create_concert(self):
        resp = self.client.post("/concerts", json={
            "name": f"Concert {random.randint(1, 10000)}",
            "description": "Load test concert",
            "seat": random.randint(10, 500),
        })
        if resp.status_code == 201:
            CONCERT_IDS.append(resp.json()["id"])
