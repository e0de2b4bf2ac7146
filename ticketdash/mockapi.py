"""
Mock participants API
---------------------
Stands in for the real upstream so the dashboard can run locally:

  MOCK_API_TOKEN=mock-token uvicorn ticketdash.mockapi:app --port 8001
  API_URL=http://localhost:8001/participants API_TOKEN=mock-token \
      uvicorn ticketdash.server:app --reload

The dataset is seeded, so every run serves the same participants. It covers
all status codes, blank ticket types/dates, check-ins and a few malformed
numeric fields.
"""
from __future__ import annotations

import os
import random
import uuid
from datetime import date, datetime, timedelta
from typing import List, Optional

from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import ORJSONResponse

from .helpers import ct_equal

MOCK_API_TOKEN = os.environ.get("MOCK_API_TOKEN", "mock-token")
MOCK_PARTICIPANTS = int(os.environ.get("MOCK_PARTICIPANTS", "120"))
MOCK_SEED = int(os.environ.get("MOCK_SEED", "7"))

TICKET_TYPES = {"Regular": 150000, "VIP": 450000, "Early Bird": 100000}
EVENT_DAYS = [date(2025, 12, 3), date(2025, 12, 4), date(2025, 12, 10)]
# weights for "1", "0", "check in", unknown
STATUS_CODES = ["1", "0", "check in", "refunded"]
STATUS_WEIGHTS = [5, 2, 3, 1]
FIRST_NAMES = ["Ayu", "Budi", "Citra", "Dewi", "Eko", "Fajar", "Gita",
               "Hadi", "Indah", "Joko", "Kartika", "Lestari"]
LAST_NAMES = ["Santoso", "Wijaya", "Pratama", "Saputra", "Lestari",
              "Hidayat", "Nugroho"]


def make_participants(n: int, seed: int = MOCK_SEED) -> List[dict]:
    rnd = random.Random(seed)
    created0 = datetime(2025, 11, 1, 9, 0, 0)
    out = []
    for i in range(n):
        first = rnd.choice(FIRST_NAMES)
        last = rnd.choice(LAST_NAMES)
        type_ticket = rnd.choice(list(TICKET_TYPES))
        event_day = rnd.choice(EVENT_DAYS)
        qty = rnd.randint(1, 4)
        status = rnd.choices(STATUS_CODES, STATUS_WEIGHTS)[0]
        paid = status in ("1", "check in")
        created = created0 + timedelta(minutes=37 * i)

        clock_in = None
        if status == "check in":
            clock_in = datetime.combine(
                event_day, datetime.min.time()
            ).replace(hour=rnd.randint(8, 11)).isoformat()

        rec = {
            "id": i + 1,
            "name": f"{first} {last}",
            "email": f"{first}.{last}{i}@example.com".lower(),
            "whatsapp": f"+62812{rnd.randint(10000000, 99999999)}",
            "event_id": "EVT-2025",
            "type_ticket": type_ticket,
            "date_ticket": event_day.isoformat(),
            "qty": qty,
            "total_paid": TICKET_TYPES[type_ticket] * qty if paid else 0,
            "order_id": f"ORD-{uuid.UUID(int=rnd.getrandbits(128)).hex[:10].upper()}",
            "qr_code": uuid.UUID(int=rnd.getrandbits(128)).hex,
            "ispaid": 1 if paid else 0,
            "date_paid": created.isoformat() if paid else None,
            "status": status,
            "clock_in": clock_in,
            "created_at": created.isoformat(),
            "expires_at": (created + timedelta(days=1)).isoformat(),
        }
        out.append(rec)

    # a few rough edges the dashboard has to tolerate
    if out:
        out[0]["qty"] = "abc"
    if len(out) > 1:
        out[1]["type_ticket"] = "  "
    if len(out) > 2:
        out[2]["date_ticket"] = ""
    if len(out) > 3:
        out[3]["total_paid"] = None
    return out


app = FastAPI(title="Mock Participants API",
              default_response_class=ORJSONResponse)
app.state.participants = make_participants(MOCK_PARTICIPANTS)


def check_token(authorization: Optional[str]) -> None:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not ct_equal(token, MOCK_API_TOKEN):
        raise HTTPException(status_code=401, detail="invalid token")


@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/participants")
async def participants(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    data = app.state.participants
    return {
        "page": 1,
        "pageSize": len(data),
        "totalData": len(data),
        "totalPages": 1 if data else 0,
        "data": data,
    }
