"""Records for accounts, sessions, jobs and notifications.

Each record converts to and from the camelCase dictionaries that are written
to the key-value store, so a load followed by a save reproduces the same blob.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class RecipientStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_final(self) -> bool:
        return self is not RecipientStatus.PENDING


@dataclass(frozen=True)
class MeasurementSet:
    """Measurements carried only by non-male profiles."""

    bust: str
    waist: str
    hips: str
    bra_size: str


@dataclass(frozen=True)
class Profile:
    name: str
    gender: str
    age: int
    measurements: Optional[MeasurementSet] = None


@dataclass(frozen=True)
class Account:
    id: str
    username: str
    password_hash: str
    profile: Profile

    @property
    def name(self) -> str:
        return self.profile.name

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "username": self.username,
            "passwordHash": self.password_hash,
            "name": self.profile.name,
            "gender": self.profile.gender,
            "age": self.profile.age,
        }
        measurements = self.profile.measurements
        if measurements is not None:
            data["measurements"] = {
                "bust": measurements.bust,
                "waist": measurements.waist,
                "hips": measurements.hips,
            }
            data["braSize"] = measurements.bra_size
        return data

    def to_public_dict(self) -> Dict[str, Any]:
        """Return the account without its password digest."""
        data = self.to_dict()
        data.pop("passwordHash", None)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        if not isinstance(data, dict):
            raise TypeError("account record must be an object")
        measurements = None
        if "measurements" in data:
            raw = data["measurements"] or {}
            if not isinstance(raw, dict):
                raise ValueError("measurements must be an object")
            measurements = MeasurementSet(
                bust=raw.get("bust", ""),
                waist=raw.get("waist", ""),
                hips=raw.get("hips", ""),
                bra_size=data.get("braSize", ""),
            )
        return cls(
            id=data["id"],
            username=data["username"],
            password_hash=data["passwordHash"],
            profile=Profile(
                name=data["name"],
                gender=data["gender"],
                age=int(data["age"]),
                measurements=measurements,
            ),
        )


@dataclass(frozen=True)
class SessionIdentity:
    id: str
    username: str
    name: str

    @classmethod
    def for_account(cls, account: Account) -> "SessionIdentity":
        return cls(id=account.id, username=account.username, name=account.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionIdentity":
        return cls(id=data["id"], username=data["username"], name=data["name"])


@dataclass
class Job:
    id: str
    title: str
    description: str
    type: str
    estimated_value: float
    creator_id: str
    creator_username: str
    recipient_usernames: List[str]
    status: Dict[str, RecipientStatus]
    created_at: str

    def is_visible_to(self, username: str) -> bool:
        return username == self.creator_username or username in self.status

    def status_for(self, username: str) -> Optional[RecipientStatus]:
        return self.status.get(username)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "estimatedValue": self.estimated_value,
            "creatorId": self.creator_id,
            "creatorUsername": self.creator_username,
            "recipientUsernames": list(self.recipient_usernames),
            "status": {
                username: self.status[username].value
                for username in self.recipient_usernames
            },
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        if not isinstance(data, dict):
            raise TypeError("job record must be an object")
        recipients = data["recipientUsernames"]
        raw_status = data.get("status") or {}
        if not isinstance(recipients, list) or not isinstance(raw_status, dict):
            raise ValueError("job recipients must be a list and status an object")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data["description"],
            type=data["type"],
            estimated_value=data["estimatedValue"],
            creator_id=data["creatorId"],
            creator_username=data["creatorUsername"],
            recipient_usernames=list(recipients),
            status={
                username: RecipientStatus(raw_status.get(username, RecipientStatus.PENDING.value))
                for username in recipients
            },
            created_at=data["createdAt"],
        )


@dataclass(frozen=True)
class Notification:
    job_title: str
    recipient: str
    time: str
    type: str = "job_accepted"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "jobTitle": self.job_title,
            "recipient": self.recipient,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        if not isinstance(data, dict):
            raise TypeError("notification record must be an object")
        return cls(
            type=data.get("type", "job_accepted"),
            job_title=data["jobTitle"],
            recipient=data["recipient"],
            time=data["time"],
        )


@dataclass
class AccountFields:
    """Raw account form input as submitted by a caller."""

    username: str = ""
    password: str = ""
    name: str = ""
    gender: str = ""
    age: Any = ""
    bust: str = ""
    waist: str = ""
    hips: str = ""
    bra_size: str = ""
    confirm_password: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AccountFields":
        """Build fields from a camelCase JSON payload."""
        return cls(
            username=str(payload.get("username") or ""),
            password=str(payload.get("password") or ""),
            name=str(payload.get("name") or ""),
            gender=str(payload.get("gender") or ""),
            age=payload.get("age", ""),
            bust=str(payload.get("bust") or ""),
            waist=str(payload.get("waist") or ""),
            hips=str(payload.get("hips") or ""),
            bra_size=str(payload.get("braSize") or ""),
            confirm_password=payload.get("confirmPassword"),
        )
