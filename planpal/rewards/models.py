"""Point policy, badge definitions and the reward catalog."""

from __future__ import annotations

from typing import TypedDict

# Points granted for each action, applied once the action has committed.
POINTS_TABLE = {
    "signup": 100,
    "create_group": 50,
    "join_group": 25,
    "create_event": 30,
    "create_poll": 20,
    "vote": 5,
    "rsvp": 10,
}

BADGES = {
    "SOCIAL_BUTTERFLY": {
        "name": "Social Butterfly",
        "icon": "🦋",
        "desc": "Earned 50 points",
    },
    "PARTY_PLANNER_PRO": {
        "name": "Party Planner Pro",
        "icon": "🎉",
        "desc": "Earned 100 points",
    },
    "GROUP_MASTER": {"name": "Group Master", "icon": "👑", "desc": "Joined 5 groups"},
}

REWARDS_CATALOG = (
    {
        "id": "movie-ticket-10",
        "name": "$10 Movie Ticket",
        "description": "Get $10 off your next movie ticket",
        "points": 500,
    },
    {
        "id": "movie-ticket-15",
        "name": "$15 Movie Ticket",
        "description": "Get $15 off your next movie ticket",
        "points": 750,
    },
    {
        "id": "cashback-5",
        "name": "$5 Cashback",
        "description": "Redeem for $5 cashback",
        "points": 150,
    },
    {
        "id": "cashback-10",
        "name": "$10 Cashback",
        "description": "Redeem for $10 cashback",
        "points": 300,
    },
    {
        "id": "gift-card-25",
        "name": "$25 Gift Card",
        "description": "Redeem for a $25 gift card",
        "points": 1500,
    },
)

CATALOG_BY_ID = {reward["id"]: reward for reward in REWARDS_CATALOG}


class Redemption(TypedDict):
    """A redemption ledger record."""

    id: str
    rewardId: str
    type: str
    points: int
    redeemedAt: str


class LedgerEntry(TypedDict):
    """One signed change to a user's balance."""

    id: str
    userId: str
    reason: str
    amount: int
    balance: int
    createdAt: str
