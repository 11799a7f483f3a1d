"""
Simple simulator: submit a few random harvests to a running API.
Run:
    python scripts/simulate_harvest.py [API_BASE]
"""
import random
import sys

import requests

API = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

FARMERS = ["Ramesh Kumar", "Suresh Patil", "Lakshmi Devi", "Anil Reddy", "Meena Sharma"]
HERBS = ["Ashwagandha", "Turmeric", "Tulsi", "Brahmi", "Neem", "Amla"]
SITES = [
    (28.6, 77.2),   # Delhi
    (19.0, 75.0),   # Maharashtra
    (12.9, 77.6),   # Bengaluru
    (22.5, 88.3),   # Kolkata
    (51.5, -0.1),   # London, outside India
]


def main():
    for i in range(5):
        lat, lon = random.choice(SITES)
        body = {
            "farmerName": random.choice(FARMERS),
            "herbName": random.choice(HERBS),
            "quantity": round(random.uniform(0.5, 25), 2),
            "latitude": round(lat + random.uniform(-0.2, 0.2), 4),
            "longitude": round(lon + random.uniform(-0.2, 0.2), 4),
            "imageUrl": f"https://example.com/uploads/harvest-{i}.jpg",
        }
        rr = requests.post(f"{API}/api/collection-events", json=body, timeout=30)
        print("harvest", i, rr.status_code, rr.text)

    rr = requests.get(f"{API}/api/collection-events/stats", timeout=10)
    print("stats:", rr.status_code, rr.text)


if __name__ == "__main__":
    main()
